"""ML Utils module - Result types and postprocessing."""

from .result_ranker import ResultRanker, format_report, report_to_dict
from .types import ImageMatches, ModelDimensions, ProbabilityReport, ScoringOutput, TextMatch

__all__ = [
    "ResultRanker",
    "format_report",
    "report_to_dict",
    "ImageMatches",
    "ModelDimensions",
    "ProbabilityReport",
    "ScoringOutput",
    "TextMatch",
]
