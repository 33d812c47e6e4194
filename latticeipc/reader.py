"""Consumer side of a shared-memory ring channel."""

from __future__ import annotations

import sys
from collections.abc import Iterator
from multiprocessing.shared_memory import SharedMemory

from latticeipc.errors import ShmError, ShmErrorCode
from latticeipc.layout import INDEX_FORMAT, RingLayout

# Checked in order: the first matching exception type decides the code.
_OPEN_ERRORS = (
    (FileNotFoundError, ShmErrorCode.SEGMENT_NOT_FOUND),
    (PermissionError, ShmErrorCode.PERMISSION_DENIED),
    (OSError, ShmErrorCode.OPEN_FAILED),
)


def _attach(name: str) -> SharedMemory:
    key = name.lstrip("/")
    if not key:
        raise ShmError(ShmErrorCode.OPEN_FAILED, f"invalid segment name {name!r}")
    options = {"track": False} if sys.version_info >= (3, 13) else {}
    try:
        return SharedMemory(name=key, **options)
    except OSError as exc:
        code = next(code for kind, code in _OPEN_ERRORS if isinstance(exc, kind))
        raise ShmError(code, f"{name}: {exc}") from exc


def _indices(buf) -> tuple[int, int]:
    """Return (read index, write index) from a mapped segment."""
    return tuple(  # type: ignore[return-value]
        INDEX_FORMAT.unpack_from(buf, offset)[0]
        for offset in (RingLayout.READ_INDEX_OFFSET, RingLayout.WRITE_INDEX_OFFSET)
    )


class ShmReader:
    """Attaches to a ring segment created by a writer and reads its items.

    The header is validated on attach. Only one thread may read.
    """

    def __init__(self, name: str, capacity: int, element_size: int) -> None:
        self.layout = RingLayout(capacity, element_size)
        self._name = name
        shm = _attach(name)
        try:
            if shm.size < self.layout.size:
                raise ShmError(
                    ShmErrorCode.SIZE_MISMATCH,
                    f"{name}: segment has {shm.size} bytes, need {self.layout.size}",
                )
            self.layout.validate_header(shm.buf)
        except ShmError:
            shm.close()
            raise
        self._shm: SharedMemory | None = shm
        self._buf = shm.buf

    @property
    def name(self) -> str:
        return self._name

    def _mapped(self):
        if self._buf is None:
            raise ShmError(ShmErrorCode.HEALTH_CHECK_FAILED, f"{self._name}: reader is closed")
        return self._buf

    def _set_read_index(self, buf, value: int) -> None:
        INDEX_FORMAT.pack_into(buf, RingLayout.READ_INDEX_OFFSET, value)

    def try_read(self) -> bytes | None:
        """Return the next item, or None if the ring is empty."""
        buf = self._mapped()
        read_idx, write_idx = _indices(buf)
        if read_idx == write_idx:
            return None
        start = self.layout.slot_offset(read_idx)
        item = bytes(buf[start : start + self.layout.element_size])
        self._set_read_index(buf, read_idx + 1)
        return item

    def drain(self) -> Iterator[bytes]:
        """Yield items until the ring is empty."""
        while (item := self.try_read()) is not None:
            yield item

    def reattach(self) -> int:
        """Re-validate the header and skip everything pending; return how many were skipped."""
        buf = self._mapped()
        self.layout.validate_header(buf)
        read_idx, write_idx = _indices(buf)
        self._set_read_index(buf, write_idx)
        return write_idx - read_idx

    def is_healthy(self) -> bool:
        """True while the segment is mapped and its header still matches."""
        try:
            self.layout.validate_header(self._mapped())
        except ShmError:
            return False
        return True

    def close(self) -> None:
        """Unmap the segment. The segment itself stays in place."""
        shm, self._shm, self._buf = self._shm, None, None
        if shm is not None:
            shm.close()

    def __enter__(self) -> ShmReader:
        return self

    def __exit__(self, *args) -> None:
        self.close()