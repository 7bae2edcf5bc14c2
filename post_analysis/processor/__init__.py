from .processor import AnalysisProcessor, Stage
from .report import format_report

__all__ = ["AnalysisProcessor", "Stage", "format_report"]
