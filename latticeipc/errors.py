"""Error types raised by the shared-memory ring channel."""

from __future__ import annotations

from enum import IntEnum


class ShmErrorCode(IntEnum):
    """Failure categories for shared-memory channel operations."""

    NONE = 0
    OPEN_FAILED = 1
    TRUNCATE_FAILED = 2
    MAP_FAILED = 3
    BAD_MAGIC = 4
    VERSION_MISMATCH = 5
    SIZE_MISMATCH = 6
    SEGMENT_NOT_FOUND = 7
    PERMISSION_DENIED = 8
    HEALTH_CHECK_FAILED = 9

    @property
    def label(self) -> str:
        """Short CamelCase name of the code."""
        return "".join(part.capitalize() for part in self.name.split("_"))

    def __str__(self) -> str:
        return self.label


class ShmError(Exception):
    """Raised when a shared-memory segment cannot be opened, mapped or validated."""

    def __init__(self, code: ShmErrorCode, message: str) -> None:
        self.code = ShmErrorCode(code)
        self.message = message
        super().__init__(f"{self.code.label}: {message}")