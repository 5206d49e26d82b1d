import asyncio
import logging

import pytest

from kiosk.cart import Cart
from kiosk.errors import GatewayError, InvalidState
from kiosk.models import FailureKind, PaymentMethod, PaymentOutcome, PaymentStatus
from kiosk.payment import PaymentEngine, ScriptedGateway, SimulatedGateway, simulated_gateway_from_config


async def _settle():
    for _ in range(5):
        await asyncio.sleep(0)


def test_card_payment_clears_cart(catalog):
    async def scenario():
        americano = catalog.get("americano")
        cart = Cart()
        engine = PaymentEngine(cart, ScriptedGateway(PaymentOutcome(approved=True, reference="TXN-1")))

        cart.add(americano)
        cart.add(americano)
        assert cart.total() == 5000
        assert cart.line_count() == 1
        cart.decrement("americano")
        assert cart.total() == 2500

        attempt = engine.initiate("card")
        assert engine.state is PaymentStatus.PROCESSING
        assert attempt.method is PaymentMethod.CARD
        assert attempt.amount == 2500

        await engine.wait()
        assert engine.state is PaymentStatus.SUCCEEDED
        assert engine.attempt.reference == "TXN-1"

        done = engine.acknowledge()
        assert done.status is PaymentStatus.SUCCEEDED
        assert engine.state is PaymentStatus.IDLE
        assert cart.line_count() == 0

    asyncio.run(scenario())


def test_declined_cash_payment_keeps_cart(catalog):
    async def scenario():
        cart = Cart()
        cart.add(catalog.get("caffe_latte"))
        cart.add(catalog.get("caffe_latte"))
        assert cart.total() == 7000
        gateway = ScriptedGateway(PaymentOutcome(approved=False, reason="Insufficient cash"))
        engine = PaymentEngine(cart, gateway)

        engine.initiate(PaymentMethod.CASH)
        await engine.wait()
        assert engine.state is PaymentStatus.FAILED
        assert engine.attempt.failure is FailureKind.DECLINED
        assert engine.attempt.reason == "Insufficient cash"

        engine.acknowledge()
        assert engine.state is PaymentStatus.IDLE
        assert cart.total() == 7000
        assert gateway.calls == [(7000, PaymentMethod.CASH)]

    asyncio.run(scenario())


def test_initiate_while_processing_is_rejected(cart, americano):
    async def scenario():
        release = asyncio.Event()
        engine = PaymentEngine(cart, ScriptedGateway(release=release))
        cart.add(americano)
        first = engine.initiate("card")

        with pytest.raises(InvalidState):
            engine.initiate("cash")
        assert engine.state is PaymentStatus.PROCESSING
        assert engine.attempt is first

        release.set()
        await engine.wait()
        assert engine.state is PaymentStatus.SUCCEEDED

    asyncio.run(scenario())


def test_initiate_rejected_until_acknowledged(cart, americano):
    async def scenario():
        engine = PaymentEngine(cart, ScriptedGateway(PaymentOutcome(approved=False)))
        cart.add(americano)
        engine.initiate("card")
        await engine.wait()
        with pytest.raises(InvalidState):
            engine.initiate("card")
        engine.acknowledge()
        second = engine.initiate("card")
        assert second.attempt_id == 2

    asyncio.run(scenario())


def test_empty_cart_cannot_be_paid(cart):
    async def scenario():
        engine = PaymentEngine(cart, ScriptedGateway())
        with pytest.raises(InvalidState):
            engine.initiate("card")
        assert engine.state is PaymentStatus.IDLE

    asyncio.run(scenario())


def test_cancel_discards_attempt_and_late_completion(cart, americano):
    async def scenario():
        release = asyncio.Event()
        gateway = ScriptedGateway(PaymentOutcome(approved=True), release=release)
        engine = PaymentEngine(cart, gateway)
        cart.add(americano)
        attempt = engine.initiate("card")

        cancelled = engine.cancel()
        assert cancelled is attempt
        assert engine.state is PaymentStatus.IDLE

        release.set()
        await _settle()
        assert engine.resolve(attempt.attempt_id, PaymentOutcome(approved=True)) is False
        assert engine.state is PaymentStatus.IDLE
        assert cart.total() == 2500

    asyncio.run(scenario())


def test_completion_for_superseded_attempt_is_ignored(cart, americano):
    async def scenario():
        release = asyncio.Event()
        engine = PaymentEngine(cart, ScriptedGateway(release=release))
        cart.add(americano)
        first = engine.initiate("card")
        engine.cancel()
        second = engine.initiate("cash")

        assert engine.resolve(first.attempt_id, PaymentOutcome(approved=True)) is False
        assert engine.state is PaymentStatus.PROCESSING
        assert engine.attempt is second

        assert engine.resolve(second.attempt_id, PaymentOutcome(approved=True)) is True
        assert engine.state is PaymentStatus.SUCCEEDED
        release.set()
        await _settle()
        assert engine.state is PaymentStatus.SUCCEEDED

    asyncio.run(scenario())


def test_gateway_error_is_distinct_failure(cart, americano):
    async def scenario():
        engine = PaymentEngine(cart, ScriptedGateway(GatewayError("terminal offline")))
        cart.add(americano)
        engine.initiate("card")
        await engine.wait()
        assert engine.state is PaymentStatus.FAILED
        assert engine.attempt.failure is FailureKind.GATEWAY_ERROR
        assert engine.attempt.reason == "terminal offline"
        engine.acknowledge()
        assert cart.total() == 2500

    asyncio.run(scenario())


def test_unexpected_gateway_exception_fails_attempt(cart, americano):
    async def scenario():
        engine = PaymentEngine(cart, ScriptedGateway(RuntimeError("boom")))
        cart.add(americano)
        engine.initiate("card")
        await engine.wait()
        assert engine.state is PaymentStatus.FAILED
        assert engine.attempt.failure is FailureKind.GATEWAY_ERROR

    asyncio.run(scenario())


def test_amount_is_snapshotted_at_initiate(cart, americano, latte):
    async def scenario():
        release = asyncio.Event()
        engine = PaymentEngine(cart, ScriptedGateway(release=release))
        cart.add(americano)
        attempt = engine.initiate("card")
        cart.add(latte)
        release.set()
        await engine.wait()
        assert attempt.amount == 2500
        assert [line.item_id for line in attempt.lines] == ["americano"]

    asyncio.run(scenario())


def test_illegal_transitions_raise(cart, americano):
    async def scenario():
        release = asyncio.Event()
        engine = PaymentEngine(cart, ScriptedGateway(release=release))
        with pytest.raises(InvalidState):
            engine.cancel()
        with pytest.raises(InvalidState):
            engine.acknowledge()

        cart.add(americano)
        engine.initiate("card")
        with pytest.raises(InvalidState):
            engine.acknowledge()

        release.set()
        await engine.wait()
        with pytest.raises(InvalidState):
            engine.cancel()

    asyncio.run(scenario())


def test_unknown_method_rejected(cart, americano):
    async def scenario():
        engine = PaymentEngine(cart, ScriptedGateway())
        cart.add(americano)
        with pytest.raises(ValueError):
            engine.initiate("crypto")

    asyncio.run(scenario())


def test_listeners_see_every_transition(cart, americano):
    async def scenario():
        engine = PaymentEngine(cart, ScriptedGateway())
        seen = []
        unsubscribe = engine.subscribe(lambda e: seen.append(e.state))
        cart.add(americano)
        engine.initiate("card")
        await engine.wait()
        engine.acknowledge()
        assert seen == [PaymentStatus.PROCESSING, PaymentStatus.SUCCEEDED, PaymentStatus.IDLE]

        unsubscribe()
        cart.add(americano)
        engine.initiate("card")
        assert len(seen) == 3

    asyncio.run(scenario())


def test_failing_listener_does_not_block_resolution(cart, americano):
    async def scenario():
        engine = PaymentEngine(cart, ScriptedGateway())

        def broken(_engine):
            raise RuntimeError("repaint failed")

        engine.subscribe(broken)
        cart.add(americano)
        engine.initiate("card")
        await engine.wait()
        assert engine.state is PaymentStatus.SUCCEEDED

    asyncio.run(scenario())


def test_simulated_gateway_outcomes_by_method():
    async def scenario():
        gateway = SimulatedGateway(delay=0, outcomes={PaymentMethod.CASH: False})
        card = await gateway.authorize(1000, PaymentMethod.CARD)
        cash = await gateway.authorize(1000, PaymentMethod.CASH)
        return card, cash

    card, cash = asyncio.run(scenario())
    assert card.approved and card.reference.startswith("TXN-")
    assert not cash.approved
    assert "declined" in cash.reason


def test_configured_outcomes():
    gateway = simulated_gateway_from_config(card_outcome="approve", cash_outcome="Decline")
    assert gateway.outcomes == {PaymentMethod.CARD: True, PaymentMethod.CASH: False}


def test_misspelled_outcome_is_logged(caplog, monkeypatch):
    monkeypatch.setattr(logging.getLogger("kiosk"), "propagate", True)
    with caplog.at_level(logging.WARNING, logger="kiosk.payment"):
        gateway = simulated_gateway_from_config(card_outcome="declined", cash_outcome="approve")
    assert gateway.outcomes[PaymentMethod.CARD] is True
    assert "payment_outcome_invalid method=card value='declined'" in caplog.text
