from __future__ import annotations
from pathlib import Path
from typing import Iterable, Iterator, List, Set, Union
import logging

import numpy as np
from PIL import Image as PILImage, UnidentifiedImageError

from .. import config
from ..exceptions import ImageDecodeError, ImageNotFoundError
from ..models.image import RawImage

logger = logging.getLogger(__name__)

# Grayscale modes deeper than 8 bits, rescaled to "L" on load.
HIGH_DEPTH_MODES = ("I;16", "I;16L", "I;16B", "I;16N", "I", "F")


class ImageRepository:
    """
    Handles file I/O for chart images. No detection logic here.
    """
    def __init__(self, valid_exts: Iterable[str] | None = None):
        self.VALID_EXTS: Set[str] = (
            {e.lower() for e in valid_exts} if valid_exts else config.valid_image_extensions()
        )

    @staticmethod
    def _to_8bit(pil_img: PILImage.Image) -> np.ndarray:
        """
        Rescale a high bit depth grayscale image (I;16*, I, F) to uint8.
        16-bit data keeps its full-scale mapping, other ranges are stretched
        from min to max.
        """
        arr = np.asarray(pil_img).astype(np.float64)
        if pil_img.mode.startswith("I;16") or (pil_img.mode == "I" and arr.min() >= 0 and arr.max() <= 65535):
            return (arr / 257.0).round().astype(np.uint8)
        if pil_img.mode == "F" and arr.min() >= 0 and arr.max() <= 1:
            return (arr * 255.0).round().astype(np.uint8)
        low, high = float(arr.min()), float(arr.max())
        if high == low:
            return np.zeros(arr.shape, dtype=np.uint8)
        return ((arr - low) * 255.0 / (high - low)).round().astype(np.uint8)

    @staticmethod
    def load(path: Union[str, Path]) -> RawImage:
        path = Path(path)
        if not path.is_file():
            raise ImageNotFoundError(path)

        try:
            with PILImage.open(path) as pil_img:
                pil_img.load()  # force full decode, truncated files fail here
                if pil_img.mode in HIGH_DEPTH_MODES:
                    mode, pixels = "L", ImageRepository._to_8bit(pil_img)
                else:
                    if pil_img.mode not in ("L", "RGB", "RGBA"):
                        pil_img = pil_img.convert("RGBA" if "transparency" in pil_img.info else "RGB")
                    mode = pil_img.mode
                    pixels = np.asarray(pil_img).copy()
        except PermissionError as err:
            raise ImageNotFoundError(path) from err
        except (UnidentifiedImageError, OSError, SyntaxError) as err:
            raise ImageDecodeError(path, str(err)) from err

        return RawImage(pixels=pixels, mode=mode, path=path)

    @staticmethod
    def to_pil(img: RawImage) -> PILImage.Image:
        """
        Rebuild a Pillow image from the decoded pixels (L, RGB or RGBA).
        """
        pixels = img.pixels
        if not pixels.flags['C_CONTIGUOUS']:
            pixels = np.ascontiguousarray(pixels)
        return PILImage.fromarray(pixels)

    @staticmethod
    def save(pixels: np.ndarray, path: Union[str, Path]) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        PILImage.fromarray(pixels).save(path)
        return path

    def iter_paths(
        self,
        folder: Union[str, Path],
        *,
        recursive: bool = False,
        exts: Iterable[str] | None = None,
    ) -> Iterator[Path]:
        """
        Yield supported image paths in a stable (sorted) order.
        """
        folder = Path(folder)
        if not folder.is_dir():
            raise NotADirectoryError(folder)

        allowed = {e.lower() for e in (exts or self.VALID_EXTS)}
        pattern = "**/*" if recursive else "*"

        for p in sorted(folder.glob(pattern)):
            if not p.is_file():
                continue
            if p.suffix.lower() not in allowed:
                logger.debug(f"Skipping due to extension: {p}")
                continue
            yield p

    def list_paths(
        self, folder: Union[str, Path], *, recursive=False, exts=None
    ) -> List[Path]:
        return list(self.iter_paths(folder, recursive=recursive, exts=exts))
