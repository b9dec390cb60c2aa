from pathlib import Path
import logging
from typing import Sequence, Union

from ..exceptions import ImageNotFoundError
from ..models.analysis_result import AnalysisResult
from ..services.annotation_service import AnnotationService, annotation_path
from ..services.image_service import ImageService
from ..services.preprocessing_service import PreprocessingService
from ..services.region_extraction_service import RegionExtractionService
from ..services.threshold_service import ThresholdService

logger = logging.getLogger(__name__)


def analyze_chart(
    path: Union[str, Path],
    *,
    target_size: Sequence[int] | None = None,
    min_area: float | None = None,
    annotate_dir: Union[str, Path, None] = None,
    annotate_root: Union[str, Path, None] = None,
    image_service: ImageService | None = None,
    preprocessing_service: PreprocessingService | None = None,
    threshold_service: ThresholdService | None = None,
    region_service: RegionExtractionService | None = None,
) -> AnalysisResult:
    """
    For one chart image:
        • load it from disk
        • normalize it into the canonical frame
        • size the minimum contour area from the frame (unless min_area is given)
        • extract the marked levels
        • optionally save an annotated copy into annotate_dir, mirroring
          the layout below annotate_root when the path lives there

    A missing file is logged and gives an empty NOT_FOUND result so one bad
    path never aborts a batch. Any other failure propagates.
    """
    image_service = image_service or ImageService()
    preprocessing_service = preprocessing_service or PreprocessingService(target_size)
    threshold_service = threshold_service or ThresholdService()
    region_service = region_service or RegionExtractionService()

    try:
        raw = image_service.load(path)
    except ImageNotFoundError as err:
        logger.warning(f"Skipping {path}: {err}")
        return AnalysisResult.not_found(path)

    normalized = preprocessing_service.normalize(raw, target_size)
    threshold = threshold_service.min_area(normalized, override=min_area)
    levels = region_service.extract(normalized, threshold)

    if annotate_dir is not None:
        out_path = annotation_path(path, annotate_dir, annotate_root)
        AnnotationService().save_annotated(normalized, levels, out_path)
        logger.debug(f"Annotated copy saved to {out_path}")

    logger.debug(f"{path}: {len(levels)} marked level(s), min_area={threshold:.1f}")
    return AnalysisResult.ok(path, levels)
