# latticeipc

Shared-memory single-producer / single-consumer ring channels, plus online
detectors for suspicious order flow: spoofing, layering, cancel-rate spikes
and order-size bursts. Pure Python, no third-party dependencies.

## Install

```
pip install latticeipc
pip install "latticeipc[test]"   # with pytest
```

## Shared-memory channels

A ring segment holds `capacity` slots of exactly `element_size` bytes each.
The capacity must be a power of two and at least 2.

- `latticeipc.writer.ShmWriter(name, capacity, element_size)` creates the
  named segment (or takes over and zeroes an existing one), writes the header
  and resets both indices. `try_write(item)` copies a bytes-like record into
  the next slot and returns `False` when the ring is full; a record of the
  wrong length raises `ValueError`. `write_blocking(item)` retries until
  there is room. The writer owns the segment: `close()` unmaps it and removes
  its name.
- `latticeipc.reader.ShmReader(name, capacity, element_size)` attaches to an
  existing segment and validates its header. `try_read()` returns the next
  record as `bytes`, or `None` when the ring is empty; `drain()` yields
  records until the ring is empty. `reattach()` re-validates the header and
  skips every pending record, returning how many were skipped (useful after
  a writer restart). `close()` unmaps without removing the segment.
- `latticeipc.channel.ShmChannel(name, capacity, element_size)` holds a
  `writer` and a `reader` on the same segment; `is_ready()` is true while
  both are healthy, and `close()` closes the reader before the writer.

All three are context managers, and all have `is_healthy()`.

```python
from latticeipc.channel import ShmChannel

with ShmChannel("/demo_ring", capacity=64, element_size=16) as ch:
    assert ch.is_ready()
    ch.writer.try_write(b"\x01" * 16)     # False when the ring is full
    record = ch.reader.try_read()         # None when the ring is empty
    rest = list(ch.reader.drain())
```

Writer and reader may live in separate processes:

```python
from latticeipc.writer import ShmWriter
from latticeipc.reader import ShmReader

# producer process
writer = ShmWriter("/feed", capacity=1024, element_size=64)
writer.write_blocking(bytes(64))

# consumer process
reader = ShmReader("/feed", capacity=1024, element_size=64)
item = reader.try_read()
```

Failures raise `latticeipc.errors.ShmError`, whose `code` is a member of
`ShmErrorCode`: for example `SEGMENT_NOT_FOUND` when no segment has that
name, `PERMISSION_DENIED`, `BAD_MAGIC`, `VERSION_MISMATCH`, `SIZE_MISMATCH`
when capacity or element size differ, and `HEALTH_CHECK_FAILED` when a
closed writer or reader is used.

`latticeipc.layout.RingLayout(capacity, element_size)` describes the bytes of
a segment: a 64-byte header (magic `0x4C41545449434500`, version 1, capacity,
element size, little-endian) at offset 0, the write index at 64, the read
index at 128 and the slots from 192. `slot_offset(index)`, `pack_header()`,
`validate_header(buffer)`, `size` and `mask` are available.

`latticeipc.watchdog.Watchdog(timeout_ms)` is a stall detector: the watched
thread calls `kick()`, a supervisor calls `is_alive()`, which is true while
`elapsed_ns()` since the last kick (or construction) is below the timeout.

## Anomaly detection

Detectors take `latticeipc.events.OrderEvent` values (`type` from
`EventType`: `ADD`, `CANCEL`, `MODIFY`, `TRADE`; `order_id`, `price`, `qty`,
`is_bid`, `symbol_id`) and an optional timestamp in nanoseconds; without one
they use the monotonic clock. `process(event, now_ns)` returns an alert
(frozen dataclasses from `latticeipc.alerts`) or `None`. Each detector has
`alerts_fired` and `reset()`.

```python
from latticeipc.events import EventType, OrderEvent
from latticeipc.spoofing import AnomalyConfig, AnomalyDetector

spoof = AnomalyDetector(AnomalyConfig(qty_threshold=100))
spoof.process(OrderEvent(EventType.ADD, order_id=1, price=100.0, qty=500), 0)
alert = spoof.process(OrderEvent(EventType.CANCEL, order_id=1, price=100.0, qty=0), 1_000_000)
if alert is not None:
    print(alert.order_id, alert.z_score)
```

- `latticeipc.spoofing.AnomalyDetector` tracks Add orders of at least
  `qty_threshold`. When a tracked order is cancelled within `time_window_ns`,
  its latency joins the running statistics; a z-score below
  `z_score_threshold` yields a `SpoofAlert`. It also exposes `stats`,
  `orders_tracked`, `pending_orders` and `recent_latencies`.
- `latticeipc.layering.LayeringDetector` fires a `LayeringAlert` when more
  than `count_threshold` large Adds land on one side of a symbol within
  `window_ns`; the count restarts after each alert.
- `latticeipc.cancel_spike.CancelSpikeDetector` measures cancels per second
  per symbol in `rate_window_ns` buckets and fires a `CancelSpikeAlert` when
  a completed bucket's rate exceeds `mean + z_threshold * stddev` of earlier
  buckets.
- `latticeipc.burst.BurstDetector` fires a `BurstAlert` when an Add's
  quantity exceeds `mean + z_threshold * stddev` of the symbol's earlier
  order sizes.
- `latticeipc.scorer.SymbolScorer` keeps a per-symbol score in [0, 1]:
  `record_alert(symbol_id, now_ns)` adds `alert_increment`, and `score`
  decays with `half_life_ns`.

Each detector is configured by a dataclass of the same family
(`AnomalyConfig`, `LayeringConfig`, `CancelSpikeConfig`, `BurstConfig`,
`ScorerConfig`); symbol-table sizes must be powers of two, and symbols past
the table's capacity are ignored.

`latticeipc.welford.WelfordStats` provides the online mean, population
variance and standard deviation used by the detectors.

## What it does not do

Ring records are opaque bytes: the package does not encode or decode
market-data messages into `OrderEvent` values, keep an order book, compute
trading signals, generate simulated market data, or collect pipeline
statistics. It has no command-line tool.