"""
Tests for eventcore.core.manager.EventManager.
"""
from __future__ import annotations

import pytest

from conftest import OrderCancelledEvent, OrderEvent, OrderPlacedEvent, PaymentEvent, RecordingListener
from eventcore import Event, EventManager, FunctionListener, InvalidArgument


# ---------------------------------------------------------------------------
# Delivery
# ---------------------------------------------------------------------------

def test_exact_type_delivery():
    manager = EventManager()
    listener = RecordingListener(OrderPlacedEvent)
    manager.register("orders", listener)

    event = OrderPlacedEvent()
    manager.publish(event)

    assert listener.events == [event]


def test_supertype_delivery():
    manager = EventManager()
    listener = RecordingListener(OrderEvent)
    manager.register("orders", listener)

    manager.publish(OrderPlacedEvent())
    manager.publish(OrderCancelledEvent())

    assert listener.count == 2


def test_unrelated_type_not_delivered():
    manager = EventManager()
    listener = RecordingListener(PaymentEvent)
    manager.register("payments", listener)

    manager.publish(OrderPlacedEvent())

    assert not listener.called


def test_sibling_type_not_delivered():
    manager = EventManager()
    listener = RecordingListener(OrderCancelledEvent)
    manager.register("cancelled", listener)

    manager.publish(OrderPlacedEvent())

    assert not listener.called


def test_catch_all_receives_everything():
    manager = EventManager()
    listener = RecordingListener()
    manager.register("all", listener)

    manager.publish(OrderPlacedEvent())
    manager.publish(PaymentEvent())
    manager.publish("not even an Event subclass")

    assert listener.count == 3


def test_listener_declaring_two_matching_bases_invoked_once():
    manager = EventManager()
    listener = RecordingListener(Event, OrderEvent, OrderPlacedEvent)
    manager.register("orders", listener)

    manager.publish(OrderPlacedEvent())

    assert listener.count == 1


def test_same_listener_via_type_and_catch_all_invoked_once():
    manager = EventManager()
    listener = RecordingListener(OrderPlacedEvent)
    manager.register("typed", listener)
    listener.classes = []
    manager.register("all", listener)

    manager.publish(OrderPlacedEvent())

    assert listener.count == 1


# ---------------------------------------------------------------------------
# Registration lifecycle
# ---------------------------------------------------------------------------

def test_reregistration_replaces_listener():
    manager = EventManager()
    first = RecordingListener(OrderPlacedEvent)
    second = RecordingListener(OrderPlacedEvent)
    manager.register("orders", first)
    manager.register("orders", second)

    manager.publish(OrderPlacedEvent())

    assert not first.called
    assert second.count == 1
    assert manager.listeners() == {"orders": second}


def test_unregister_is_idempotent():
    manager = EventManager()
    listener = RecordingListener(OrderPlacedEvent)
    manager.register("orders", listener)

    manager.unregister("orders")
    snapshot = manager.listeners()
    manager.unregister("orders")
    manager.unregister("never-registered")

    assert manager.listeners() == snapshot == {}
    manager.publish(OrderPlacedEvent())
    assert not listener.called


@pytest.mark.parametrize("key", ["", None, 42])
def test_register_rejects_bad_key(key):
    manager = EventManager()
    with pytest.raises(InvalidArgument):
        manager.register(key, RecordingListener())


def test_register_rejects_missing_listener():
    manager = EventManager()
    with pytest.raises(InvalidArgument):
        manager.register("key", None)
    assert manager.listeners() == {}


def test_null_event_is_a_no_op():
    manager = EventManager()
    listener = RecordingListener()
    manager.register("all", listener)

    manager.publish(None)

    assert not listener.called


def test_function_listener():
    manager = EventManager()
    got = []
    manager.register("fn", FunctionListener(lambda e: got.append(e.amount), PaymentEvent))

    manager.publish(PaymentEvent(amount=3.5))
    manager.publish(OrderPlacedEvent())

    assert got == [3.5]


# ---------------------------------------------------------------------------
# End-to-end scenario
# ---------------------------------------------------------------------------

def test_order_and_payment_scenario():
    manager = EventManager()
    l1 = RecordingListener(OrderPlacedEvent)
    l2 = RecordingListener()
    l3 = RecordingListener(PaymentEvent)
    manager.register("l1", l1)
    manager.register("l2", l2)
    manager.register("l3", l3)

    manager.publish(OrderPlacedEvent())
    assert (l1.count, l2.count, l3.count) == (1, 1, 0)

    manager.unregister("l2")
    manager.publish(PaymentEvent())
    assert (l1.count, l2.count, l3.count) == (1, 1, 1)
