"""ML module - Preprocessing, scoring and ranking."""

from .preprocessing import ImageBatcher, ImageLoader, TextTokenizer
from .utils import ProbabilityReport, ResultRanker
from .models import SimilarityModel, SimilarityModelFactory
from .engines import ZeroShotMatcher

__all__ = [
    "ImageBatcher",
    "ImageLoader",
    "TextTokenizer",
    "ProbabilityReport",
    "ResultRanker",
    "SimilarityModel",
    "SimilarityModelFactory",
    "ZeroShotMatcher",
]
