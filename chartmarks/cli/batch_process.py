"""
Batch marked-level detection over a directory of chart images.

    chartmarks-batch data/charts -o results.json --workers 4
"""
import argparse
import logging
import sys
from collections import Counter
from pathlib import Path
from typing import List, Optional

from .. import config
from ..exceptions import ChartMarksError
from ..models.analysis_result import AnalysisStatus
from ..pipeline.batch_runner import run_batch
from ..repositories.result_repository import ResultRepository
from ..services.image_service import ImageService

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chartmarks-batch",
        description="Locate marked rectangular regions in chart images.",
    )
    parser.add_argument("input_dir", type=Path, help="Directory containing chart images")
    parser.add_argument("-o", "--output", type=Path, default=None,
                        help="Write results as JSON to this file (default: stdout summary only)")
    parser.add_argument("-w", "--workers", type=int, default=None,
                        help="Number of parallel workers (default: BATCH_CONCURRENCY or 4)")
    parser.add_argument("-r", "--recursive", action="store_true", help="Search subdirectories too")
    parser.add_argument("--min-area", type=float, default=None,
                        help="Fixed minimum contour area instead of the dynamic threshold")
    parser.add_argument("--annotate-dir", type=Path, default=None,
                        help="Save copies of the normalized charts with boxes drawn")
    parser.add_argument("--threads", action="store_true",
                        help="Use a thread pool instead of worker processes")
    parser.add_argument("--keep-going", action="store_true",
                        help="Do not stop on unexpected per-image failures")
    parser.add_argument("--no-progress", action="store_true", help="Hide the progress bar")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else config.log_level(),
        format='%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s',
        datefmt='%H:%M:%S'
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    image_service = ImageService()
    try:
        paths = image_service.list_images(args.input_dir, recursive=args.recursive)
    except NotADirectoryError:
        logger.error(f"Input directory does not exist: {args.input_dir}")
        return 2

    if not paths:
        print(f"No images found in {args.input_dir}")
        return 0

    workers = args.workers if args.workers is not None else config.batch_concurrency()
    analyze_kwargs = {}
    if args.min_area is not None:
        analyze_kwargs["min_area"] = args.min_area
    if args.annotate_dir is not None:
        analyze_kwargs["annotate_dir"] = args.annotate_dir
        analyze_kwargs["annotate_root"] = args.input_dir

    try:
        results = run_batch(
            paths,
            workers,
            executor="thread" if args.threads else "process",
            fail_fast=not args.keep_going,
            show_progress=not args.no_progress,
            **analyze_kwargs,
        )
    except (ChartMarksError, ValueError) as err:
        logger.error(f"Batch aborted: {err}")
        return 1

    if args.output is not None:
        out = ResultRepository().save_json(results, args.output)
        print(f"Results written to {out}")

    counts = Counter(r.status for r in results)
    levels = sum(len(r) for r in results)
    print(f"\nProcessed {len(paths)} image(s): {counts[AnalysisStatus.OK]} analyzed, "
          f"{counts[AnalysisStatus.NOT_FOUND]} missing, {counts[AnalysisStatus.FAILED]} failed")
    print(f"Marked levels found: {levels}")
    for result in results:
        print(f"  {result.path.name}: {len(result)} level(s) [{result.status.value}]")

    return 1 if counts[AnalysisStatus.FAILED] else 0


if __name__ == "__main__":
    sys.exit(main())
