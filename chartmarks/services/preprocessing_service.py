from typing import Sequence, Tuple

import numpy as np
from PIL import Image as PILImage, ImageEnhance

from .. import config
from ..models.image import NormalizedImage, RawImage
from .image_service import ImageService

# Enhancement policy, tuned together with the Canny thresholds.
CONTRAST_FACTOR = 2.0
BRIGHTNESS_FACTOR = 1.5
RESAMPLE_FILTER = PILImage.Resampling.LANCZOS


def validate_target_size(target_size: Sequence[int]) -> Tuple[int, int]:
    if len(target_size) != 2:
        raise ValueError(f"target_size must be (width, height), got {target_size!r}")
    width, height = target_size
    for value in (width, height):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value <= 0:
            raise ValueError(f"target_size must hold two positive integers, got {target_size!r}")
    return int(width), int(height)


class PreprocessingService:
    """
    Brings a RawImage into the canonical frame:
    resize -> grayscale -> contrast -> brightness. The order is fixed.
    """

    def __init__(self, target_size: Sequence[int] | None = None):
        self.target_size = validate_target_size(target_size or config.target_size())
        self.image_service = ImageService()

    def normalize(self, image: RawImage, target_size: Sequence[int] | None = None) -> NormalizedImage:
        """
        Args:
            image: Decoded image as loaded from disk.
            target_size: (width, height) override for this call.

        Returns:
            NormalizedImage: uint8 grayscale array of exactly target_size.
        """
        size = validate_target_size(target_size) if target_size is not None else self.target_size

        pil_img = self.image_service.to_pil_image(image)
        pil_img = pil_img.resize(size, RESAMPLE_FILTER)
        if pil_img.mode != "L":
            pil_img = pil_img.convert("L")

        pil_img = ImageEnhance.Contrast(pil_img).enhance(CONTRAST_FACTOR)
        pil_img = ImageEnhance.Brightness(pil_img).enhance(BRIGHTNESS_FACTOR)

        return NormalizedImage(pixels=np.asarray(pil_img, dtype=np.uint8).copy(), source=image.path)
