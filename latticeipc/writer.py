"""Producer side of a shared-memory ring channel."""

from __future__ import annotations

import sys
import time
from multiprocessing.shared_memory import SharedMemory

from latticeipc.errors import ShmError, ShmErrorCode
from latticeipc.layout import INDEX_FORMAT, RingLayout


def _segment_key(name: str) -> str:
    key = name.lstrip("/")
    if not key:
        raise ShmError(ShmErrorCode.OPEN_FAILED, f"invalid segment name {name!r}")
    return key


def _attach(key: str, **kwargs) -> SharedMemory:
    if sys.version_info >= (3, 13):
        kwargs["track"] = False
    return SharedMemory(name=key, **kwargs)


def _open_segment(name: str, size: int) -> SharedMemory:
    key = _segment_key(name)
    try:
        try:
            return _attach(key, create=True, size=size)
        except FileExistsError:
            pass
        existing = _attach(key)
        if existing.size >= size:
            return existing
        existing.close()
        existing.unlink()
        return _attach(key, create=True, size=size)
    except PermissionError as exc:
        raise ShmError(ShmErrorCode.PERMISSION_DENIED, f"{name}: {exc}") from exc
    except OSError as exc:
        raise ShmError(ShmErrorCode.OPEN_FAILED, f"{name}: {exc}") from exc


class ShmWriter:
    """Creates (or re-initialises) a named ring segment and writes fixed-size items.

    The writer owns the segment: closing it removes the name. Only one thread
    may write.
    """

    def __init__(self, name: str, capacity: int, element_size: int) -> None:
        self.layout = RingLayout(capacity, element_size)
        self._name = name
        self._shm: SharedMemory | None = _open_segment(name, self.layout.size)
        self._buf = self._shm.buf
        self._init_header()

    @property
    def name(self) -> str:
        return self._name

    def _init_header(self) -> None:
        buf = self._buf
        buf[: self.layout.size] = bytes(self.layout.size)
        INDEX_FORMAT.pack_into(buf, RingLayout.WRITE_INDEX_OFFSET, 0)
        INDEX_FORMAT.pack_into(buf, RingLayout.READ_INDEX_OFFSET, 0)
        header = self.layout.pack_header()
        # Publish the magic last so a reader only sees it once everything else is set.
        buf[8 : RingLayout.HEADER_SIZE] = header[8:]
        buf[0:8] = header[:8]

    def _mapped(self):
        if self._buf is None:
            raise ShmError(ShmErrorCode.HEALTH_CHECK_FAILED, f"{self._name}: writer is closed")
        return self._buf

    def try_write(self, item) -> bool:
        """Copy ``item`` into the next slot; return False if the ring is full."""
        buf = self._mapped()
        size = self.layout.element_size
        if len(item) != size:
            raise ValueError(f"item must be exactly {size} bytes, got {len(item)}")
        write_idx = INDEX_FORMAT.unpack_from(buf, RingLayout.WRITE_INDEX_OFFSET)[0]
        read_idx = INDEX_FORMAT.unpack_from(buf, RingLayout.READ_INDEX_OFFSET)[0]
        if write_idx - read_idx >= self.layout.capacity:
            return False
        offset = self.layout.slot_offset(write_idx)
        buf[offset : offset + size] = item
        INDEX_FORMAT.pack_into(buf, RingLayout.WRITE_INDEX_OFFSET, write_idx + 1)
        return True

    def write_blocking(self, item) -> None:
        """Retry ``try_write`` until space is available."""
        while not self.try_write(item):
            time.sleep(0)

    def is_healthy(self) -> bool:
        """True while the segment is mapped and large enough for the layout."""
        return self._buf is not None and len(self._buf) >= self.layout.size

    def close(self) -> None:
        """Unmap the segment and remove its name. Safe to call twice."""
        shm = self._shm
        if shm is None:
            return
        self._buf = None
        self._shm = None
        shm.close()
        try:
            shm.unlink()
        except FileNotFoundError:
            pass

    def __enter__(self) -> ShmWriter:
        return self

    def __exit__(self, *args) -> None:
        self.close()