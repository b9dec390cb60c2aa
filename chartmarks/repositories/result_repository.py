import json
from pathlib import Path
from typing import List, Sequence, Union

from ..models.analysis_result import AnalysisResult, AnalysisStatus
from ..models.marked_level import MarkedLevel


class ResultRepository:
    """
    Persists batch results as JSON. One record per input path, input order kept.
    """

    @staticmethod
    def to_records(results: Sequence[AnalysisResult]) -> List[dict]:
        return [result.as_dict() for result in results]

    @staticmethod
    def from_record(record: dict) -> AnalysisResult:
        return AnalysisResult(
            path=Path(record["path"]),
            status=AnalysisStatus(record.get("status", AnalysisStatus.OK.value)),
            levels=tuple(MarkedLevel(**level) for level in record.get("levels", [])),
            error=record.get("error"),
        )

    def save_json(self, results: Sequence[AnalysisResult], path: Union[str, Path]) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as fh:
            json.dump(self.to_records(results), fh, indent=2)
        return path

    def load_json(self, path: Union[str, Path]) -> List[AnalysisResult]:
        with open(path, "r", encoding="utf-8") as fh:
            records = json.load(fh)
        return [self.from_record(record) for record in records]
