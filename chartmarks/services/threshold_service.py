from typing import Sequence, Union

from .. import config
from ..models.image import NormalizedImage, RawImage

# Image area is divided by this to get the noise cutoff. Tunable.
AREA_DIVISOR = 1000.0

Dimensions = Union[NormalizedImage, RawImage, Sequence[int]]


class ThresholdService:
    """
    Minimum contour area policy. Larger images carry larger incidental
    speckle, so the cutoff scales with image area.
    """

    def __init__(self, divisor: float | None = None):
        divisor = config.area_divisor(AREA_DIVISOR) if divisor is None else divisor
        if divisor <= 0:
            raise ValueError(f"Area divisor must be positive, got {divisor}")
        self.divisor = float(divisor)

    @staticmethod
    def _dimensions(image: Dimensions):
        if isinstance(image, (NormalizedImage, RawImage)):
            return image.width, image.height
        width, height = image
        return width, height

    def dynamic_threshold(self, image: Dimensions) -> float:
        width, height = self._dimensions(image)
        return width * height / self.divisor

    def min_area(self, image: Dimensions, override: float | None = None) -> float:
        """
        Args:
            image: Image or (width, height) to size the cutoff from.
            override: Caller-specified threshold, returned unchanged when given.

        Returns:
            float: Contours with area <= this value are rejected.
        """
        if override is not None:
            return override
        return self.dynamic_threshold(image)
