# tests/app/test_notifications.py
from ride_dispatch.app.notifications import NotificationHub
from ride_dispatch.runtime.account_factory import AccountFactory


class Listener:
    """Bare subscriber that only counts deliveries."""

    def __init__(self, id):
        self.id = id
        self.calls = 0

    def on_notify(self, message):
        self.calls += 1


def accounts():
    f = AccountFactory()
    return f.create("rider", "Alice", "Cash", 10), f.create("driver", "Dan", True, 10)


def test_notify_reaches_only_named_subscribers():
    hub = NotificationHub()
    alice, dan = accounts()
    hub.subscribe(alice)
    hub.subscribe(dan)

    assert hub.notify([alice], "hello") == 1
    assert alice.inbox == ["hello"]
    assert dan.inbox == []


def test_double_subscribe_never_double_delivers():
    hub = NotificationHub()
    alice, _ = accounts()
    hub.subscribe(alice)
    hub.subscribe(alice)
    hub.notify([alice, alice], "once")
    assert alice.inbox == ["once"]
    assert len(hub) == 1


def test_delivery_follows_subscription_order():
    hub = NotificationHub()
    order = []
    a, b = Listener(1), Listener(2)
    a.on_notify = lambda m: order.append("a")
    b.on_notify = lambda m: order.append("b")
    hub.subscribe(b)
    hub.subscribe(a)
    hub.notify([a, b], "x")
    assert order == ["b", "a"]


def test_unsubscribe_stops_delivery():
    hub = NotificationHub()
    alice, dan = accounts()
    hub.subscribe(alice)
    hub.subscribe(dan)
    hub.unsubscribe(alice)

    assert alice not in hub
    assert hub.notify([alice, dan], "bye") == 1
    assert alice.inbox == []
    assert dan.inbox == ["bye"]


def test_unsubscribed_accounts_are_ignored():
    hub = NotificationHub()
    stranger = Listener(9)
    assert hub.notify([stranger], "nobody home") == 0
    assert stranger.calls == 0


def test_a_raising_subscriber_does_not_block_the_others():
    hub = NotificationHub()
    broken = Listener(1)

    def full(message):
        raise RuntimeError("mailbox full")

    broken.on_notify = full
    alice, _ = accounts()
    hub.subscribe(broken)
    hub.subscribe(alice)

    assert hub.notify([broken, alice], "hi") == 1
    assert alice.inbox == ["hi"]
