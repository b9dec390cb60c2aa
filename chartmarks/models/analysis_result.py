from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, Iterator, Optional, Tuple, Union

from .marked_level import MarkedLevel


class AnalysisStatus(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass(frozen=True)
class AnalysisResult:
    """
    Marked levels found in one image, in contour discovery order.

    Behaves like a read-only sequence of MarkedLevel. ``status`` tells a
    regular (possibly empty) result apart from a path that could not be read
    and from one whose analysis raised (``error`` holds the message).
    """
    path: Path
    status: AnalysisStatus = AnalysisStatus.OK
    levels: Tuple[MarkedLevel, ...] = field(default_factory=tuple)
    error: Optional[str] = None

    @classmethod
    def ok(cls, path: Union[str, Path], levels: Iterable[MarkedLevel]) -> "AnalysisResult":
        return cls(path=Path(path), status=AnalysisStatus.OK, levels=tuple(levels))

    @classmethod
    def not_found(cls, path: Union[str, Path]) -> "AnalysisResult":
        return cls(path=Path(path), status=AnalysisStatus.NOT_FOUND)

    @classmethod
    def failed(cls, path: Union[str, Path], error: str = "") -> "AnalysisResult":
        return cls(path=Path(path), status=AnalysisStatus.FAILED, error=error or None)

    @property
    def found(self) -> bool:
        return self.status is AnalysisStatus.OK

    def __len__(self) -> int:
        return len(self.levels)

    def __iter__(self) -> Iterator[MarkedLevel]:
        return iter(self.levels)

    def __getitem__(self, index):
        return self.levels[index]

    def as_dict(self) -> dict:
        record = {
            "path": str(self.path),
            "status": self.status.value,
            "levels": [level.as_dict() for level in self.levels],
        }
        if self.error is not None:
            record["error"] = self.error
        return record
