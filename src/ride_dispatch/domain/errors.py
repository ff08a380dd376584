"""Error hierarchy for the dispatcher.

DispatchError subclasses are expected conditions the engine turns into
notifications. ContractViolation subclasses mean a programming defect and
are never caught by the engine.
"""

from typing import Any


class DispatchError(Exception):
    """Base for recoverable dispatch errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidRoleError(DispatchError):
    """Unknown role tag passed to the account factory."""


class InvalidBalanceError(DispatchError):
    """Initial balance is negative or not a number."""


class InvalidDutyFlagError(DispatchError):
    """Driver on-duty flag is not a bool."""


class InvalidPickupError(DispatchError):
    """Pickup is not a location with a string name and a numeric coordinate."""


class NoDriversError(DispatchError):
    """No drivers are registered at all."""


class NoOnDutyDriversError(DispatchError):
    """Drivers exist but none is on duty and free."""


class InsufficientFundsError(DispatchError):
    """Rider balance does not cover the charge."""


class ContractViolation(Exception):
    """Base for fatal errors."""


class InvalidTransitionError(ContractViolation):
    """A ride status change that the state machine does not allow."""
