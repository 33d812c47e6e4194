import dataclasses

import pytest

from latticeipc.events import EventType, OrderEvent


def add_event(**overrides):
    fields = {"order_id": 1, "price": 100.0, "qty": 10, **overrides}
    return OrderEvent(EventType.ADD, **fields)


def test_event_types_round_trip_and_are_distinct():
    looked_up = [EventType(member.value) for member in EventType]
    assert looked_up == list(EventType)
    assert len({member.value for member in looked_up}) == len(EventType)


def test_order_event_coerces_type_value():
    ev = OrderEvent(EventType.CANCEL.value, order_id=5, price=100.0, qty=0)
    assert ev.type is EventType.CANCEL


def test_order_event_keeps_fields():
    ev = add_event(order_id=42, price=101.5, qty=500, is_bid=False, symbol_id=3)
    assert (ev.order_id, ev.price, ev.qty, ev.is_bid, ev.symbol_id) == (42, 101.5, 500, False, 3)


def test_order_event_defaults():
    ev = add_event()
    assert ev.is_bid is True
    assert ev.symbol_id == 0


def test_unknown_type_rejected():
    with pytest.raises(ValueError):
        OrderEvent("unknown", order_id=1, price=100.0, qty=10)


@pytest.mark.parametrize(
    "overrides",
    [{"order_id": -1}, {"qty": -5}, {"symbol_id": 0x10000}, {"symbol_id": -1}],
)
def test_out_of_range_fields_rejected(overrides):
    with pytest.raises(ValueError):
        add_event(**overrides)


def test_replace_revalidates():
    with pytest.raises(ValueError):
        dataclasses.replace(add_event(), qty=-1)


def test_order_event_is_immutable():
    ev = add_event()
    with pytest.raises(dataclasses.FrozenInstanceError):
        ev.qty = 20  # type: ignore[misc]
    assert ev.qty == 10
    assert ev == add_event()