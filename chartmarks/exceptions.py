from __future__ import annotations
from pathlib import Path


class ChartMarksError(Exception):
    """Base class for every error raised by chartmarks."""


class ImageNotFoundError(ChartMarksError, FileNotFoundError):
    """The path does not point to an existing, readable file."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        super().__init__(f"Image not found or unreadable: {self.path}")

    def __reduce__(self):
        return type(self), (self.path,)


class ImageDecodeError(ChartMarksError, ValueError):
    """The file exists but could not be decoded as an image."""

    def __init__(self, path: str | Path, reason: str = ""):
        self.path = Path(path)
        self.reason = reason
        message = f"Could not decode image: {self.path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)

    # Raised inside worker processes, must survive the trip back.
    def __reduce__(self):
        return type(self), (self.path, self.reason)


class BatchItemError(ChartMarksError):
    """
    Raised by the batch runner when one item failed unexpectedly.
    The original exception is chained as ``__cause__``.
    """

    def __init__(self, index: int, path: str | Path):
        self.index = index
        self.path = Path(path)
        super().__init__(f"Analysis failed for item {index}: {self.path}")

    def __reduce__(self):
        return type(self), (self.index, self.path)
