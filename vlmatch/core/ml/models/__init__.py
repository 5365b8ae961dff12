"""ML Models module - Scoring model contract and backends."""

from .base import SimilarityModel
from .factory import SimilarityModelFactory
from .siglip_model import SiglipSimilarityModel

__all__ = [
    "SimilarityModel",
    "SimilarityModelFactory",
    "SiglipSimilarityModel",
]
