from concurrent.futures import Future, ProcessPoolExecutor, ThreadPoolExecutor, as_completed
from functools import partial
from pathlib import Path
import logging
from typing import Callable, List, Sequence, Union

from tqdm import tqdm

from .. import config
from ..exceptions import BatchItemError
from ..models.analysis_result import AnalysisResult
from .chart_analyzer import analyze_chart

logger = logging.getLogger(__name__)

EXECUTORS = {
    "process": ProcessPoolExecutor,
    "thread": ThreadPoolExecutor,
}


def _validate_concurrency(concurrency) -> int:
    if isinstance(concurrency, bool) or not isinstance(concurrency, int) or concurrency <= 0:
        raise ValueError(f"concurrency must be a positive integer, got {concurrency!r}")
    return concurrency


def run_batch(
    paths: Sequence[Union[str, Path]],
    concurrency: int = config.DEFAULT_CONCURRENCY,
    *,
    executor: str = "process",
    analyze: Callable[..., AnalysisResult] = analyze_chart,
    fail_fast: bool = True,
    show_progress: bool = False,
    **analyze_kwargs,
) -> List[AnalysisResult]:
    """
    Analyze every path on a pool of ``concurrency`` workers.

    Each path is an independent task; results are collected from the futures
    in submission order, so ``results[i]`` always belongs to ``paths[i]``
    whichever worker finishes first.

    Args:
        paths: Image paths to analyze.
        concurrency: Number of workers in the pool.
        executor: "process" (default, the work is CPU-bound) or "thread".
        analyze: Per-path callable. Must be picklable in process mode.
        fail_fast: When True, the first unexpected failure (in input order)
            is raised as BatchItemError once every task has finished.
            When False the failure is logged and its slot holds a FAILED
            result carrying the error message.
        show_progress: Display a tqdm progress bar while tasks complete.
        **analyze_kwargs: Forwarded to ``analyze`` for every path.

    Returns:
        List[AnalysisResult]: Index-aligned with ``paths``.
    """
    concurrency = _validate_concurrency(concurrency)
    if executor not in EXECUTORS:
        raise ValueError(f"Unknown executor {executor!r}, expected one of {sorted(EXECUTORS)}")

    paths = list(paths)
    if not paths:
        return []

    task = partial(analyze, **analyze_kwargs) if analyze_kwargs else analyze
    logger.info(f"Analyzing {len(paths)} image(s) with {concurrency} {executor} worker(s)")

    with EXECUTORS[executor](max_workers=concurrency) as pool:
        futures: List[Future] = [pool.submit(task, p) for p in paths]

        if show_progress:
            for _ in tqdm(as_completed(futures), total=len(futures), desc="charts", ncols=70):
                pass

        results: List[AnalysisResult] = []
        first_failure = None
        for index, (path, future) in enumerate(zip(paths, futures)):
            try:
                results.append(future.result())
            except Exception as err:
                logger.error(f"Analysis failed for {path}: {err!r}")
                if first_failure is None:
                    first_failure = (index, path, err)
                results.append(AnalysisResult.failed(path, f"{type(err).__name__}: {err}"))

    if first_failure is not None and fail_fast:
        index, path, err = first_failure
        raise BatchItemError(index, path) from err

    return results
