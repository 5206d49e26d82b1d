"""Exceptions raised by the ordering core."""

from __future__ import annotations


class KioskError(Exception):
    """Base class for kiosk errors."""


class InvalidState(KioskError):
    """Operation is not legal in the payment engine's current state."""

    def __init__(self, operation: str, state: object, detail: str = "") -> None:
        self.operation = operation
        self.state = state
        message = f"{operation} not allowed while {getattr(state, 'value', state)}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class NotFound(KioskError):
    """A cart line or catalog entry does not exist.

    Cart operations treat a missing line as a no-op, so the cart itself
    never raises this.
    """


class GatewayError(KioskError):
    """A payment gateway could not produce a decision (timeout, connectivity)."""
