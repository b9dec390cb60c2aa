import logging
from typing import List, Tuple

import cv2
import numpy as np

from ..models.image import NormalizedImage
from ..models.marked_level import MarkedLevel

logger = logging.getLogger(__name__)

# Canny gradient thresholds, tuned for the enhanced grayscale output.
CANNY_LOW = 50
CANNY_HIGH = 150


class RegionExtractionService:
    """
    Edge detection + outer contour geometry. Works only on NormalizedImage
    objects, never touches the filesystem.
    """

    def __init__(self, canny_low: int = CANNY_LOW, canny_high: int = CANNY_HIGH):
        self.canny_low = canny_low
        self.canny_high = canny_high

    def detect_edges(self, image: NormalizedImage) -> np.ndarray:
        """Binary edge map (0/255), same shape as the image."""
        return cv2.Canny(image.pixels, self.canny_low, self.canny_high)

    @staticmethod
    def find_contours(edges: np.ndarray) -> List[np.ndarray]:
        # Outer boundaries only, collinear points dropped.
        contours, _ = cv2.findContours(edges, cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_SIMPLE)
        return list(contours)

    def extract(self, image: NormalizedImage, min_area: float) -> Tuple[MarkedLevel, ...]:
        """
        Args:
            image: Preprocessed image in the canonical frame.
            min_area: Contours whose area is <= this are discarded.

        Returns:
            Tuple[MarkedLevel, ...]: Bounding boxes in contour discovery order.
        """
        contours = self.find_contours(self.detect_edges(image))

        levels = []
        for contour in contours:
            if cv2.contourArea(contour) <= min_area:
                continue
            levels.append(MarkedLevel.from_rect(cv2.boundingRect(contour)))

        logger.debug(f"{len(levels)}/{len(contours)} contours kept (min_area={min_area})")
        return tuple(levels)
