"""A writer and a reader bound to the same ring segment."""

from __future__ import annotations

from contextlib import ExitStack

from latticeipc.reader import ShmReader
from latticeipc.writer import ShmWriter


class ShmChannel:
    """Owns a writer and a reader for one named segment.

    Useful for tests and single-process deployments; the reader is closed
    before the writer removes the segment.
    """

    def __init__(self, name: str, capacity: int, element_size: int) -> None:
        self._name = name
        with ExitStack() as cleanup:
            self.writer = cleanup.enter_context(ShmWriter(name, capacity, element_size))
            self.reader = ShmReader(name, capacity, element_size)
            cleanup.pop_all()

    @property
    def name(self) -> str:
        return self._name

    def is_ready(self) -> bool:
        """True while both ends are attached to a valid segment."""
        return all(end.is_healthy() for end in (self.writer, self.reader))

    def close(self) -> None:
        """Close the reader, then the writer, which removes the segment."""
        for end in (self.reader, self.writer):
            end.close()

    def __enter__(self) -> ShmChannel:
        return self

    def __exit__(self, *args) -> None:
        self.close()