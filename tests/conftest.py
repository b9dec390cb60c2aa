from pathlib import Path
from typing import Iterable, Tuple

import numpy as np
import pytest
from PIL import Image as PILImage

Rect = Tuple[int, int, int, int]


def write_chart(
    path: Path,
    size: Tuple[int, int] = (800, 600),
    rects: Iterable[Rect] = (),
    mode: str = "L",
) -> Path:
    """Write a white chart with solid black (x, y, w, h) rectangles."""
    width, height = size
    pixels = np.full((height, width), 255, dtype=np.uint8)
    for x, y, w, h in rects:
        pixels[y:y + h, x:x + w] = 0
    img = PILImage.fromarray(pixels)
    if mode != "L":
        img = img.convert(mode)
    img.save(path)
    return path


@pytest.fixture
def rectangle_chart(tmp_path: Path) -> Path:
    return write_chart(tmp_path / "rectangle.png", rects=[(100, 100, 200, 150)])


@pytest.fixture
def rgb_rectangle_chart(tmp_path: Path) -> Path:
    return write_chart(tmp_path / "rectangle_rgb.png", rects=[(100, 100, 200, 150)], mode="RGB")


@pytest.fixture
def speckle_chart(tmp_path: Path) -> Path:
    specks = [(x, y, 6, 6) for x in range(50, 750, 100) for y in range(50, 550, 100)]
    return write_chart(tmp_path / "speckle.png", rects=specks)


@pytest.fixture
def blank_chart(tmp_path: Path) -> Path:
    return write_chart(tmp_path / "blank.png")


@pytest.fixture
def corrupt_chart(tmp_path: Path) -> Path:
    path = tmp_path / "corrupt.png"
    path.write_bytes(b"this is not a png file")
    return path


def write_chart_16bit(
    path: Path,
    size: Tuple[int, int] = (800, 600),
    rects: Iterable[Rect] = (),
    background: int = 40000,
    mark: int = 20000,
) -> Path:
    """Write a 16-bit grayscale PNG whose values all lie above 255."""
    width, height = size
    pixels = np.full((height, width), background, dtype=np.uint16)
    for x, y, w, h in rects:
        pixels[y:y + h, x:x + w] = mark
    PILImage.fromarray(pixels).save(path)
    return path
