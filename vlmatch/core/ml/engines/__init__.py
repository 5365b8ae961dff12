"""ML Engines module - Matching orchestration and model lifecycle."""

from .base_matcher import AbstractMatcher
from .model_manager import ModelManager, get_model_manager
from .zero_shot_matcher import ZeroShotMatcher

__all__ = [
    "AbstractMatcher",
    "ZeroShotMatcher",
    "ModelManager",
    "get_model_manager",
]
