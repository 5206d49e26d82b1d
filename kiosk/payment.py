"""Payment state machine and gateway capability.

An attempt moves ``IDLE -> PROCESSING -> SUCCEEDED | FAILED`` and is
discarded on ``acknowledge()`` (or ``cancel()`` while processing). The
gateway call runs as an asyncio task so ``initiate()`` returns right away;
its completion is applied only if it still belongs to the current attempt.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections import deque
from typing import Callable, Protocol

from kiosk.cart import Cart
from kiosk.config import CARD_OUTCOME, CASH_OUTCOME, PAYMENT_DELAY_SECONDS
from kiosk.errors import GatewayError, InvalidState
from kiosk.models import FailureKind, PaymentAttempt, PaymentMethod, PaymentOutcome, PaymentStatus
from kiosk.summary import proceed_to_payment

logger = logging.getLogger(__name__)

Listener = Callable[["PaymentEngine"], None]


class PaymentGateway(Protocol):
    """Authorizes an amount for a payment method."""

    async def authorize(self, amount: int, method: PaymentMethod) -> PaymentOutcome:
        ...


class SimulatedGateway:
    """Resolve every authorization after a fixed delay.

    ``outcomes`` maps a method to whether it is approved; unlisted methods
    are approved.
    """

    def __init__(self, delay: float = PAYMENT_DELAY_SECONDS, outcomes: dict[PaymentMethod, bool] | None = None) -> None:
        self.delay = delay
        self.outcomes = dict(outcomes or {})

    async def authorize(self, amount: int, method: PaymentMethod) -> PaymentOutcome:
        await asyncio.sleep(self.delay)
        if self.outcomes.get(method, True):
            return PaymentOutcome(approved=True, reference=f"TXN-{int(time.time() * 1000)}")
        return PaymentOutcome(approved=False, reason=f"{method.value.title()} payment was declined")


_OUTCOME_APPROVES: dict[str, bool] = {"approve": True, "decline": False}


def _approves(method: PaymentMethod, outcome: str) -> bool:
    approves = _OUTCOME_APPROVES.get(outcome.strip().lower())
    if approves is None:
        logger.warning("payment_outcome_invalid method=%s value=%r fallback=approve", method.value, outcome)
        return True
    return approves


def simulated_gateway_from_config(
    card_outcome: str = CARD_OUTCOME,
    cash_outcome: str = CASH_OUTCOME,
) -> SimulatedGateway:
    """Build the simulated gateway from the KIOSK_* environment settings.

    Outcomes must be ``approve`` or ``decline``; anything else is logged
    and approved.
    """
    return SimulatedGateway(
        delay=PAYMENT_DELAY_SECONDS,
        outcomes={
            PaymentMethod.CARD: _approves(PaymentMethod.CARD, card_outcome),
            PaymentMethod.CASH: _approves(PaymentMethod.CASH, cash_outcome),
        },
    )


class ScriptedGateway:
    """Deterministic gateway that replays queued outcomes.

    Queued exceptions are raised instead of returned. When ``release`` is
    given, each authorization waits for it, which lets a caller decide
    when the resolution arrives. An empty queue approves.
    """

    def __init__(self, *results: PaymentOutcome | Exception, release: asyncio.Event | None = None) -> None:
        self._results: deque[PaymentOutcome | Exception] = deque(results)
        self.release = release
        self.calls: list[tuple[int, PaymentMethod]] = []

    def queue(self, result: PaymentOutcome | Exception) -> None:
        self._results.append(result)

    async def authorize(self, amount: int, method: PaymentMethod) -> PaymentOutcome:
        self.calls.append((amount, method))
        if self.release is not None:
            await self.release.wait()
        result = self._results.popleft() if self._results else PaymentOutcome(approved=True, reference="TEST-REF")
        if isinstance(result, Exception):
            raise result
        return result


class PaymentEngine:
    """Drives payment attempts for one cart."""

    def __init__(self, cart: Cart, gateway: PaymentGateway) -> None:
        self.cart = cart
        self.gateway = gateway
        self._attempt: PaymentAttempt | None = None
        self._task: asyncio.Task[None] | None = None
        self._next_attempt_id = 1
        self._listeners: list[Listener] = []

    @property
    def attempt(self) -> PaymentAttempt | None:
        return self._attempt

    @property
    def state(self) -> PaymentStatus:
        if self._attempt is None:
            return PaymentStatus.IDLE
        return self._attempt.status

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a state-change listener and return its unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def initiate(self, method: PaymentMethod | str) -> PaymentAttempt:
        """Start an attempt for the current cart total.

        Must be called from a running event loop. Raises ``InvalidState``
        when an attempt is already active or the cart is empty.
        """
        method = PaymentMethod(method)
        if self._attempt is not None:
            raise InvalidState("initiate", self.state)
        snapshot = proceed_to_payment(self.cart)
        if not snapshot.lines:
            raise InvalidState("initiate", self.state, "cart is empty")

        loop = asyncio.get_running_loop()
        attempt = PaymentAttempt(
            attempt_id=self._next_attempt_id,
            method=method,
            amount=snapshot.amount,
            lines=snapshot.lines,
        )
        self._next_attempt_id += 1
        self._attempt = attempt
        self._task = loop.create_task(self._authorize(attempt))
        logger.info(
            "payment_initiated attempt=%d method=%s amount=%d",
            attempt.attempt_id,
            method.value,
            attempt.amount,
        )
        self._notify()
        return attempt

    def resolve(self, attempt_id: int, outcome: PaymentOutcome | GatewayError) -> bool:
        """Apply a completion to the current attempt.

        Returns False, leaving everything untouched, when the completion
        belongs to a cancelled or superseded attempt.
        """
        attempt = self._attempt
        if attempt is None or attempt.attempt_id != attempt_id or attempt.status is not PaymentStatus.PROCESSING:
            logger.info(
                "payment_stale_completion attempt=%d current=%s",
                attempt_id,
                attempt.attempt_id if attempt is not None else None,
            )
            return False

        if isinstance(outcome, GatewayError):
            attempt.status = PaymentStatus.FAILED
            attempt.failure = FailureKind.GATEWAY_ERROR
            attempt.reason = str(outcome) or "Payment gateway unavailable"
        elif outcome.approved:
            attempt.status = PaymentStatus.SUCCEEDED
            attempt.reference = outcome.reference
        else:
            attempt.status = PaymentStatus.FAILED
            attempt.failure = FailureKind.DECLINED
            attempt.reason = outcome.reason or "Payment was declined"

        logger.info(
            "payment_resolved attempt=%d status=%s failure=%s",
            attempt.attempt_id,
            attempt.status.value,
            attempt.failure.value if attempt.failure else None,
        )
        self._notify()
        return True

    def cancel(self) -> PaymentAttempt:
        """Abort the processing attempt; the cart is kept."""
        attempt = self._attempt
        if attempt is None or attempt.status is not PaymentStatus.PROCESSING:
            raise InvalidState("cancel", self.state)
        self._discard()
        logger.info("payment_cancelled attempt=%d", attempt.attempt_id)
        self._notify()
        return attempt

    def acknowledge(self) -> PaymentAttempt:
        """Close a resolved attempt, clearing the cart if it succeeded."""
        attempt = self._attempt
        if attempt is None or not attempt.is_resolved:
            raise InvalidState("acknowledge", self.state)
        if attempt.status is PaymentStatus.SUCCEEDED:
            self.cart.clear()
        self._discard()
        logger.info("payment_acknowledged attempt=%d status=%s", attempt.attempt_id, attempt.status.value)
        self._notify()
        return attempt

    async def wait(self) -> PaymentAttempt | None:
        """Wait for the in-flight authorization, if any, and return the attempt."""
        task = self._task
        if task is not None and not task.done():
            await asyncio.wait({task})
        return self._attempt

    async def _authorize(self, attempt: PaymentAttempt) -> None:
        try:
            outcome: PaymentOutcome | GatewayError = await self.gateway.authorize(attempt.amount, attempt.method)
        except GatewayError as exc:
            outcome = exc
        except Exception as exc:
            logger.exception("payment_gateway_crashed attempt=%d", attempt.attempt_id)
            outcome = GatewayError(f"Payment gateway failed: {exc}")
        self.resolve(attempt.attempt_id, outcome)

    def _discard(self) -> None:
        task = self._task
        self._task = None
        self._attempt = None
        if task is not None and not task.done() and task is not asyncio.current_task():
            task.cancel()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("payment_listener_failed listener=%r", listener)
