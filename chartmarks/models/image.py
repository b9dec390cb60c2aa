from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple
import numpy as np


@dataclass(frozen=True, eq=False)
class RawImage:
    """
    Decoded image exactly as read from disk.
    Owned by the single analysis call that loaded it.
    """
    pixels: np.ndarray # Shape (H, W) or (H, W, C), dtype uint8.
    mode: str # Pillow mode string, e.g. "RGB", "RGBA", "L".
    path: Path | None = None # Source of the image.

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])


@dataclass(frozen=True, eq=False)
class NormalizedImage:
    """
    Single-channel, enhanced intensities in the canonical frame.
    """
    pixels: np.ndarray # Shape (H, W), dtype uint8.
    source: Path | None = None

    def __post_init__(self):
        if self.pixels.ndim != 2:
            raise ValueError(f"NormalizedImage must be single channel, got shape {self.pixels.shape}")

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height
