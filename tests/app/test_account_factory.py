# tests/app/test_account_factory.py
from decimal import Decimal

import pytest

from ride_dispatch.config.models import AccountsModel
from ride_dispatch.domain.entities.driver import DriverProfile, DriverRole
from ride_dispatch.domain.entities.rider import RiderProfile, RiderRole
from ride_dispatch.domain.errors import (
    InvalidBalanceError,
    InvalidDutyFlagError,
    InvalidRoleError,
)
from ride_dispatch.runtime.account_factory import AccountFactory, known_roles
from ride_dispatch.sim.rng import RNGRegistry


def make_factory(seed=0, **accounts):
    return AccountFactory(AccountsModel(**accounts), rng_registry=RNGRegistry(seed))


def test_all_four_roles_are_registered():
    assert known_roles() == ["driver", "premium_rider", "priority_driver", "rider"]


def test_rider_roles_read_secondary_as_payment_method():
    f = make_factory()
    r = f.create("rider", "Alice", "Credit Card", 50)
    p = f.create("premium_rider", "Bob", "PayPal", "75.25")

    assert isinstance(r, RiderProfile) and r.role is RiderRole.RIDER
    assert r.payment_method == "Credit Card"
    assert r.balance == Decimal("50")
    assert r.discount_rate == 0

    assert p.role is RiderRole.PREMIUM_RIDER and p.is_premium
    assert p.discount_rate == Decimal("0.05")
    assert p.balance == Decimal("75.25")


def test_driver_roles_read_secondary_as_on_duty_flag():
    f = make_factory()
    d = f.create("driver", "Charlie", True, 100)
    v = f.create("priority_driver", "Vera", False, 100)

    assert isinstance(d, DriverProfile) and d.role is DriverRole.DRIVER
    assert d.on_duty is True
    assert d.commission_rate == Decimal("0.05")

    assert v.is_priority and v.on_duty is False
    assert v.commission_rate == Decimal("0.02")


def test_role_tag_is_case_insensitive():
    f = make_factory()
    assert f.create("Premium_Rider", "A", "Cash", 1).is_premium
    assert f.create("PRIORITY_DRIVER", "B", True, 1).is_priority


def test_unknown_role_fails_without_consuming_an_id():
    f = make_factory()
    with pytest.raises(InvalidRoleError, match="Invalid role: pilot"):
        f.create("pilot", "X", True, 10)
    assert f.create("rider", "Y", "Cash", 10).id == 1


def test_negative_or_garbage_balance_is_rejected():
    f = make_factory()
    with pytest.raises(InvalidBalanceError):
        f.create("rider", "A", "Cash", -1)
    with pytest.raises(InvalidBalanceError):
        f.create("driver", "B", True, "lots")
    with pytest.raises(InvalidBalanceError):
        f.create("driver", "C", True, float("nan"))


def test_waiting_spot_is_an_integer_in_range_and_seeded():
    f1, f2 = make_factory(seed=3), make_factory(seed=3)
    a = [f1.create("driver", f"d{i}", True, 0).waiting_spot for i in range(20)]
    b = [f2.create("driver", f"d{i}", True, 0).waiting_spot for i in range(20)]
    assert a == b
    assert all(0 <= s <= 100 and float(s).is_integer() for s in a)


def test_explicit_waiting_spot_and_configured_rates():
    f = make_factory(driver_commission_rate="0.10", spot_min=10, spot_max=10)
    d = f.create("driver", "D", True, 0)
    e = f.create("driver", "E", True, 0, waiting_spot=42)
    assert d.waiting_spot == 10
    assert d.commission_rate == Decimal("0.10")
    assert e.waiting_spot == 42


@pytest.mark.parametrize("flag", ["false", "true", 0, 1, None])
def test_on_duty_flag_must_be_a_bool(flag):
    f = make_factory()
    with pytest.raises(InvalidDutyFlagError):
        f.create("driver", "D", flag, 10)
    with pytest.raises(InvalidDutyFlagError):
        f.create("priority_driver", "V", flag, 10)
    assert f.create("driver", "E", False, 10).id == 1
