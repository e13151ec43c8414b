from __future__ import annotations
from pathlib import Path


class HphexError(Exception):
    """
    Base class for every failure the pipeline reports.
    Carries the offending file (when known) so diagnostics can name it.
    """
    def __init__(self, message: str, path: str | Path | None = None):
        super().__init__(message)
        self.message = message
        self.path = Path(path) if path is not None else None

    def with_path(self, path: str | Path) -> "HphexError":
        self.path = Path(path)
        return self

    def __str__(self) -> str:
        if self.path is None:
            return self.message
        return f"{self.path}: {self.message}"


class FormatError(HphexError, ValueError):
    """Header or pixel data malformed, truncated or out of range."""


class IoError(HphexError, OSError):
    """File could not be opened, read or written."""
    def __init__(self, message: str, path: str | Path | None = None, errno: int | None = None):
        super().__init__(message, path)
        self.errno = errno
        self.strerror = message
        self.filename = str(self.path) if self.path is not None else None

    def with_path(self, path: str | Path) -> "IoError":
        super().with_path(path)
        self.filename = str(self.path)
        return self


class AllocationError(HphexError, MemoryError):
    """Pixel buffer could not be allocated (or exceeds the configured limit)."""


class ProcessingError(HphexError):
    """A filter reported failure while the pipeline was running."""
