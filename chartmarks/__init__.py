"""
chartmarks: locate marked rectangular regions in static chart images.
"""
from .models.marked_level import MarkedLevel
from .models.analysis_result import AnalysisResult, AnalysisStatus
from .pipeline.chart_analyzer import analyze_chart
from .pipeline.batch_runner import run_batch

__all__ = [
    "MarkedLevel",
    "AnalysisResult",
    "AnalysisStatus",
    "analyze_chart",
    "run_batch",
]

__version__ = "1.0.0"
