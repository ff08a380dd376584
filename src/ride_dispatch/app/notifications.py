# ride_dispatch/app/notifications.py
import logging
from collections.abc import Iterable

from ride_dispatch.app.protocols import Account

logger = logging.getLogger(__name__)


class NotificationHub:
    """Synchronous publish/subscribe registry for text messages.

    notify() only reaches accounts that are subscribed, once each per call,
    in the order they subscribed. Messages are not stored. A subscriber that
    raises is logged and skipped; the rest still get the message.
    """

    def __init__(self):
        self._subs: list[Account] = []

    def __len__(self) -> int:
        return len(self._subs)

    def __contains__(self, account: Account) -> bool:
        return any(s is account for s in self._subs)

    def subscribe(self, account: Account) -> None:
        if account not in self:
            self._subs.append(account)

    def unsubscribe(self, account: Account) -> None:
        self._subs = [s for s in self._subs if s is not account]

    def notify(self, accounts: Iterable[Account], message: str) -> int:
        wanted = {id(a) for a in accounts}
        delivered = 0
        for sub in self._subs:
            if id(sub) not in wanted:
                continue
            try:
                sub.on_notify(message)
            except Exception:
                logger.warning(
                    "notify_failed",
                    extra={"extra": {"account_id": sub.id, "msg": message}},
                    exc_info=True,
                )
                continue
            delivered += 1
            logger.debug(
                "notify",
                extra={"extra": {"account_id": sub.id, "msg": message}},
            )
        return delivered
