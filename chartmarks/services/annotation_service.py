import hashlib
from pathlib import Path
from typing import Iterable, Tuple, Union

import cv2
import numpy as np

from ..models.image import NormalizedImage
from ..models.marked_level import MarkedLevel
from .image_service import ImageService


class AnnotationService:
    """
    Draws marked levels on top of the normalized frame for visual review.
    Returns new pixel arrays, the input image is left untouched.
    """

    _DEFAULT_COLOR: Tuple[int, int, int] = (255, 0, 0)  # red, RGB order

    def __init__(self, color: Tuple[int, int, int] | None = None, thickness: int = 2):
        self.color = color or self._DEFAULT_COLOR
        self.thickness = thickness
        self.image_service = ImageService()

    def draw_levels(self, image: NormalizedImage, levels: Iterable[MarkedLevel]) -> np.ndarray:
        canvas = cv2.cvtColor(image.pixels, cv2.COLOR_GRAY2RGB)
        for level in levels:
            top_left = (level.x, level.y)
            # cv2.rectangle treats the bottom-right corner as inclusive
            bottom_right = (level.x + level.width - 1, level.y + level.height - 1)
            cv2.rectangle(canvas, top_left, bottom_right, self.color, self.thickness)
        return canvas

    def save_annotated(
        self,
        image: NormalizedImage,
        levels: Iterable[MarkedLevel],
        path: Union[str, Path],
    ) -> Path:
        canvas = self.draw_levels(image, levels)
        return self.image_service.image_repository.save(canvas, path)


def annotation_path(
    path: Union[str, Path],
    annotate_dir: Union[str, Path],
    annotate_root: Union[str, Path, None] = None,
) -> Path:
    """
    Output file for the annotated copy of ``path``.

    Paths under ``annotate_root`` keep their relative layout inside
    ``annotate_dir``. Anything else gets a short hash of its resolved path in
    the name, so two charts never share an output file.
    """
    path = Path(path)
    annotate_dir = Path(annotate_dir)
    if annotate_root is not None:
        try:
            relative = path.resolve().relative_to(Path(annotate_root).resolve())
        except ValueError:
            relative = None
        if relative is not None:
            return annotate_dir / relative.parent / f"{relative.stem}_levels.png"

    digest = hashlib.sha1(str(path.resolve()).encode("utf-8")).hexdigest()[:8]
    return annotate_dir / f"{path.stem}_{digest}_levels.png"
