# runtime/account_factory.py
from collections.abc import Callable
from decimal import Decimal, InvalidOperation

import numpy as np

from ride_dispatch.app.protocols import Account
from ride_dispatch.config.models import AccountsModel
from ride_dispatch.domain.entities.driver import DriverProfile, DriverRole
from ride_dispatch.domain.entities.rider import RiderProfile, RiderRole
from ride_dispatch.domain.errors import (
    InvalidBalanceError,
    InvalidDutyFlagError,
    InvalidRoleError,
)
from ride_dispatch.sim.rng import RNGRegistry

RoleBuilder = Callable[["AccountFactory", int, str, object, Decimal, float | None], Account]

_role_registry: dict[str, RoleBuilder] = {}


def register_role(tag: str):
    def deco(fn: RoleBuilder):
        _role_registry[tag] = fn
        return fn

    return deco


def known_roles() -> list[str]:
    return sorted(_role_registry)


def _to_balance(value) -> Decimal:
    try:
        bal = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation:
        raise InvalidBalanceError(f"Invalid balance: {value!r}") from None
    if not bal.is_finite() or bal < 0:
        raise InvalidBalanceError(f"Invalid balance: {value!r}", details={"balance": str(value)})
    return bal


def _to_on_duty(value) -> bool:
    if not isinstance(value, bool):
        raise InvalidDutyFlagError(
            f"Invalid on-duty flag: {value!r}", details={"on_duty": repr(value)}
        )
    return value


class AccountFactory:
    """
    Builds riders and drivers from a role tag.

    `secondary` is the payment-method label for rider roles and the
    on-duty flag for driver roles; nothing else interprets it.
    """

    def __init__(
        self, cfg: AccountsModel | None = None, *, rng_registry: RNGRegistry | None = None
    ):
        self.cfg = cfg or AccountsModel()
        self.rng_registry = rng_registry or RNGRegistry(0)
        self._next_id = 1

    def create(
        self,
        role_tag: str,
        name: str,
        secondary,
        initial_balance,
        *,
        waiting_spot: float | None = None,
    ) -> Account:
        tag = str(role_tag).strip().lower()
        try:
            builder = _role_registry[tag]
        except KeyError:
            raise InvalidRoleError(
                f"Invalid role: {role_tag}", details={"known": known_roles()}
            ) from None
        balance = _to_balance(initial_balance)
        account = builder(self, self._next_id, name, secondary, balance, waiting_spot)
        self._next_id += 1
        return account

    def draw_waiting_spot(self, account_id: int) -> float:
        g: np.random.Generator = self.rng_registry.substream("waiting_spot", account_id)
        return float(g.integers(self.cfg.spot_min, self.cfg.spot_max + 1))


@register_role(RiderRole.RIDER.value)
def _make_rider(factory: AccountFactory, aid, name, secondary, balance, _spot):
    return RiderProfile(id=aid, name=name, payment_method=str(secondary), balance=balance)


@register_role(RiderRole.PREMIUM_RIDER.value)
def _make_premium_rider(factory: AccountFactory, aid, name, secondary, balance, _spot):
    return RiderProfile(
        id=aid,
        name=name,
        payment_method=str(secondary),
        balance=balance,
        role=RiderRole.PREMIUM_RIDER,
        discount_rate=factory.cfg.premium_discount_rate,
    )


@register_role(DriverRole.DRIVER.value)
def _make_driver(factory: AccountFactory, aid, name, secondary, balance, spot):
    return DriverProfile(
        id=aid,
        name=name,
        on_duty=_to_on_duty(secondary),
        balance=balance,
        waiting_spot=factory.draw_waiting_spot(aid) if spot is None else spot,
        commission_rate=factory.cfg.driver_commission_rate,
    )


@register_role(DriverRole.PRIORITY_DRIVER.value)
def _make_priority_driver(factory: AccountFactory, aid, name, secondary, balance, spot):
    return DriverProfile(
        id=aid,
        name=name,
        on_duty=_to_on_duty(secondary),
        balance=balance,
        waiting_spot=factory.draw_waiting_spot(aid) if spot is None else spot,
        role=DriverRole.PRIORITY_DRIVER,
        commission_rate=factory.cfg.priority_commission_rate,
    )
