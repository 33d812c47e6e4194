"""Shared-memory SPSC ring channels, a stall watchdog and order-flow anomaly detectors."""

__version__ = "0.1.0"