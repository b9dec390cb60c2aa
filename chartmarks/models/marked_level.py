from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Dict, Sequence


@dataclass(frozen=True)
class MarkedLevel:
    """Axis-aligned bounding box of one accepted contour, top-left origin."""
    x: int
    y: int
    width: int
    height: int

    @classmethod
    def from_rect(cls, rect: Sequence[int]) -> "MarkedLevel":
        x, y, w, h = rect
        return cls(x=int(x), y=int(y), width=int(w), height=int(h))

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)
