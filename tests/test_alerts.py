import dataclasses

import pytest

from latticeipc.alerts import (
    BurstAlert,
    CancelSpikeAlert,
    LayeringAlert,
    PendingOrder,
    SpoofAlert,
)


def test_pending_order_default_invalid():
    assert not PendingOrder().is_valid()


def test_pending_order_with_id_is_valid():
    order = PendingOrder(order_id=7, price=100.0, qty=500, placed_ns=10)
    assert order.is_valid()


def test_pending_order_invalidate():
    order = PendingOrder(order_id=7, price=100.0, qty=500, placed_ns=10)
    order.invalidate()
    assert not order.is_valid()
    assert order.order_id == 0
    assert order.qty == 500


def test_pending_order_copy_is_independent():
    order = PendingOrder(order_id=3, price=99.5, qty=1000)
    copy = dataclasses.replace(order)
    copy.invalidate()
    assert order.is_valid()


def test_spoof_alert_defaults_and_equality():
    alert = SpoofAlert(order_id=1, price=100.0, qty=500, placed_ns=0, cancelled_ns=1, z_score=-3.0)
    assert alert == SpoofAlert(1, 100.0, 500, 0, 1, -3.0)
    assert SpoofAlert().z_score == 0.0


@pytest.mark.parametrize(
    "alert_cls",
    [SpoofAlert, BurstAlert, CancelSpikeAlert, LayeringAlert],
)
def test_alerts_are_immutable(alert_cls):
    alert = alert_cls()
    with pytest.raises(dataclasses.FrozenInstanceError):
        alert.z_score = 1.0  # type: ignore[misc]
    assert alert == alert_cls()
    assert dataclasses.asdict(alert) == dataclasses.asdict(alert_cls())


def test_layering_alert_side():
    alert = LayeringAlert(symbol_id=1, is_bid=True, order_count=4)
    assert alert.is_bid is True
    assert alert.order_count == 4
    assert LayeringAlert().is_bid is False


def test_burst_alert_fields():
    alert = BurstAlert(symbol_id=1, qty=100000, order_id=999, mean_qty=1000.0, stddev_qty=100.0, z_score=990.0)
    assert alert.qty == 100000
    assert alert.symbol_id == 1


def test_cancel_spike_alert_replace():
    alert = CancelSpikeAlert(symbol_id=2, cancels_per_sec=100.0, mean_rate=5.0)
    raised = dataclasses.replace(alert, z_score=4.5)
    assert raised.z_score == 4.5
    assert raised.cancels_per_sec == alert.cancels_per_sec
    assert alert.z_score == 0.0