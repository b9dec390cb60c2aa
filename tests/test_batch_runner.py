import time
from pathlib import Path

import pytest

from chartmarks.exceptions import BatchItemError
from chartmarks.models.analysis_result import AnalysisResult, AnalysisStatus
from chartmarks.models.marked_level import MarkedLevel
from chartmarks.pipeline.batch_runner import run_batch
from chartmarks.pipeline.chart_analyzer import analyze_chart


def _delayed_analyze(path, completed):
    """Sleeps for the number of seconds encoded in the file stem."""
    delay = float(Path(path).stem)
    time.sleep(delay)
    completed.append(str(path))
    return AnalysisResult.ok(path, [MarkedLevel(0, 0, int(delay * 100), 1)])


def _failing_analyze(path):
    if "bad" in str(path):
        raise RuntimeError(f"boom: {path}")
    return AnalysisResult.ok(path, [])


class TestOrdering:
    def test_results_follow_input_order(self):
        paths = ["0.3.png", "0.15.png", "0.0.png"]
        completed = []

        results = run_batch(paths, 3, executor="thread", analyze=_delayed_analyze, completed=completed)

        assert completed == list(reversed(paths))
        assert [str(r.path) for r in results] == paths
        assert [r[0].width for r in results] == [30, 15, 0]

    def test_more_paths_than_workers(self):
        paths = [f"0.0{i}.png" for i in range(9, 0, -1)]

        results = run_batch(paths, 2, executor="thread", analyze=_delayed_analyze, completed=[])

        assert [str(r.path) for r in results] == paths

    def test_empty_batch(self):
        assert run_batch([]) == []


class TestProcessPool:
    def test_matches_sequential_analysis(self, rectangle_chart: Path, speckle_chart: Path):
        paths = [str(rectangle_chart), "/nonexistent/path.png", str(speckle_chart), str(rectangle_chart)]

        results = run_batch(paths, 2)

        assert [r.levels for r in results] == [analyze_chart(p).levels for p in paths]
        assert [r.status for r in results] == [
            AnalysisStatus.OK, AnalysisStatus.NOT_FOUND, AnalysisStatus.OK, AnalysisStatus.OK,
        ]
        assert len(results[0]) == 1

    def test_forwards_analyze_kwargs(self, rectangle_chart: Path):
        results = run_batch([rectangle_chart], 1, min_area=1e6)

        assert len(results[0]) == 0


class TestFailures:
    def test_first_failure_is_raised_with_its_index(self):
        paths = ["ok-1.png", "bad-1.png", "ok-2.png", "bad-2.png"]

        with pytest.raises(BatchItemError) as exc_info:
            run_batch(paths, 2, executor="thread", analyze=_failing_analyze)

        assert exc_info.value.index == 1
        assert exc_info.value.path == Path("bad-1.png")
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_keep_going_leaves_other_slots_intact(self):
        paths = ["ok-1.png", "bad-1.png", "ok-2.png"]

        results = run_batch(paths, 2, executor="thread", analyze=_failing_analyze, fail_fast=False)

        assert results[1].status is AnalysisStatus.FAILED
        assert results[1].path == Path("bad-1.png")
        assert "boom" in results[1].error
        assert len(results) == len(paths)
        assert results[0].path == Path("ok-1.png")
        assert results[2].path == Path("ok-2.png")

    def test_corrupt_file_in_process_pool(self, rectangle_chart: Path, corrupt_chart: Path):
        with pytest.raises(BatchItemError) as exc_info:
            run_batch([rectangle_chart, corrupt_chart], 2)

        assert exc_info.value.index == 1


class TestConfiguration:
    @pytest.mark.parametrize("concurrency", [0, -1, 1.5, True])
    def test_invalid_concurrency(self, concurrency):
        with pytest.raises(ValueError):
            run_batch(["a.png"], concurrency)

    def test_unknown_executor(self):
        with pytest.raises(ValueError):
            run_batch(["a.png"], 1, executor="cluster")

    def test_progress_bar(self, capsys):
        results = run_batch(["0.0.png"], 1, executor="thread", analyze=_delayed_analyze,
                            completed=[], show_progress=True)

        assert len(results) == 1
        assert "charts" in capsys.readouterr().err
