from unittest.mock import patch

import pytest

from latticeipc.watchdog import Watchdog

START_NS = 1_000


@pytest.fixture
def clock():
    with patch("time.monotonic_ns") as fake:
        fake.return_value = START_NS
        yield fake


def test_fresh_watchdog_with_long_timeout_is_alive():
    assert Watchdog(60_000).is_alive()


def test_zero_timeout_is_never_alive():
    wd = Watchdog(0)
    assert not wd.is_alive()
    wd.kick()
    assert not wd.is_alive()


def test_timeout_units_round_trip():
    wd = Watchdog(250)
    assert wd.timeout_ms == 250
    assert wd.timeout_ns == 250_000_000


@pytest.mark.parametrize("timeout_ms", [-1, 0x1_0000_0000])
def test_out_of_range_timeout_rejected(timeout_ms):
    with pytest.raises(ValueError):
        Watchdog(timeout_ms)


def test_elapsed_follows_clock(clock):
    wd = Watchdog(5)
    clock.return_value = START_NS + 1_234
    assert wd.elapsed_ns() == 1_234


@pytest.mark.parametrize("offset, alive", [(4_999_999, True), (5_000_000, False)])
def test_deadline_boundary_is_exclusive(clock, offset, alive):
    wd = Watchdog(5)
    clock.return_value = START_NS + offset
    assert wd.is_alive() is alive


def test_kick_resets_deadline(clock):
    wd = Watchdog(5)
    clock.return_value = START_NS + 50_000_000
    assert not wd.is_alive()
    wd.kick()
    assert wd.elapsed_ns() == 0
    assert wd.is_alive()


def test_clock_going_backwards_does_not_give_negative_elapsed(clock):
    wd = Watchdog(5)
    clock.return_value = START_NS - 500
    assert wd.elapsed_ns() == 0