import numpy as np
import pytest

from chartmarks.models.image import NormalizedImage
from chartmarks.services import threshold_service
from chartmarks.services.threshold_service import AREA_DIVISOR, ThresholdService


class TestDynamicThreshold:
    def test_canonical_frame(self):
        assert ThresholdService().min_area((800, 600)) == 480.0

    @pytest.mark.parametrize(
        "dims",
        [(800, 600), (100, 100), (1920, 1080), (1, 1)],
    )
    def test_exact_value(self, dims):
        width, height = dims
        assert ThresholdService().min_area(dims) == width * height / AREA_DIVISOR

    def test_monotonic_in_area(self):
        service = ThresholdService()

        assert service.min_area((800, 600)) > service.min_area((640, 480))
        assert service.min_area((1000, 10)) > service.min_area((99, 100))

    def test_accepts_images(self):
        image = NormalizedImage(pixels=np.zeros((300, 400), dtype=np.uint8))

        assert ThresholdService().min_area(image) == 120.0


class TestOverride:
    @pytest.mark.parametrize("override", [0, 12.5, 480, 1e6])
    def test_override_is_returned_unchanged(self, override):
        assert ThresholdService().min_area((800, 600), override=override) == override


class TestDivisor:
    def test_custom_divisor(self):
        assert ThresholdService(divisor=500).min_area((800, 600)) == 960.0

    def test_module_divisor_is_the_fallback(self, monkeypatch):
        monkeypatch.delenv("MIN_AREA_DIVISOR", raising=False)
        monkeypatch.setattr(threshold_service, "AREA_DIVISOR", 500.0)

        assert ThresholdService().min_area((800, 600)) == 960.0

    def test_divisor_from_environment(self, monkeypatch):
        monkeypatch.setenv("MIN_AREA_DIVISOR", "2000")

        assert ThresholdService().min_area((800, 600)) == 240.0

    @pytest.mark.parametrize("divisor", [0, -10])
    def test_non_positive_divisor(self, divisor):
        with pytest.raises(ValueError):
            ThresholdService(divisor=divisor)
