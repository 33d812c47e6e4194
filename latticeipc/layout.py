"""Byte layout of a shared-memory single-producer/single-consumer ring."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import ClassVar

from latticeipc.errors import ShmError, ShmErrorCode

_HEADER = struct.Struct("<QIII")

INDEX_FORMAT = struct.Struct("<Q")
"""Encoding of the monotonically increasing read and write indices."""


@dataclass(frozen=True)
class RingLayout:
    """Offsets and header of a ring of ``capacity`` fixed-size slots.

    Cache-line layout: header at 0, write index at 64, read index at 128,
    slots from 192. Indices grow without wrapping; the slot of an index is
    ``index & (capacity - 1)``.
    """

    MAGIC: ClassVar[int] = 0x4C41545449434500
    VERSION: ClassVar[int] = 1
    CACHE_LINE: ClassVar[int] = 64
    HEADER_SIZE: ClassVar[int] = 64
    WRITE_INDEX_OFFSET: ClassVar[int] = 64
    READ_INDEX_OFFSET: ClassVar[int] = 128
    SLOTS_OFFSET: ClassVar[int] = 192

    capacity: int
    element_size: int

    def __post_init__(self) -> None:
        if self.capacity < 2 or self.capacity & (self.capacity - 1):
            raise ValueError(f"capacity must be a power of two >= 2, got {self.capacity}")
        if not 0 < self.element_size <= 0xFFFFFFFF:
            raise ValueError(f"element_size must be a positive 32-bit value, got {self.element_size}")
        if self.capacity > 0xFFFFFFFF:
            raise ValueError("capacity must fit in 32 bits")

    @property
    def mask(self) -> int:
        return self.capacity - 1

    @property
    def size(self) -> int:
        """Total number of bytes the segment needs."""
        return self.SLOTS_OFFSET + self.capacity * self.element_size

    def slot_offset(self, index: int) -> int:
        """Byte offset of the slot that holds ring index ``index``."""
        return self.SLOTS_OFFSET + (index & self.mask) * self.element_size

    def pack_header(self) -> bytes:
        """The 64-byte header a freshly initialised segment carries."""
        packed = _HEADER.pack(self.MAGIC, self.VERSION, self.capacity, self.element_size)
        return packed.ljust(self.HEADER_SIZE, b"\0")

    def validate_header(self, buffer) -> None:
        """Raise ShmError unless ``buffer`` starts with a header matching this layout."""
        if len(buffer) < self.HEADER_SIZE:
            raise ShmError(ShmErrorCode.SIZE_MISMATCH, "buffer is shorter than the header")
        magic, version, capacity, element_size = _HEADER.unpack_from(buffer, 0)
        if magic != self.MAGIC:
            raise ShmError(ShmErrorCode.BAD_MAGIC, f"unexpected magic {magic:#018x}")
        if version != self.VERSION:
            raise ShmError(ShmErrorCode.VERSION_MISMATCH, f"unsupported version {version}")
        if capacity != self.capacity:
            raise ShmError(
                ShmErrorCode.SIZE_MISMATCH,
                f"capacity {capacity} does not match expected {self.capacity}",
            )
        if element_size != self.element_size:
            raise ShmError(
                ShmErrorCode.SIZE_MISMATCH,
                f"element size {element_size} does not match expected {self.element_size}",
            )