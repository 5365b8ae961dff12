from .model_configs import DynamicModelRegistry, SiglipModelSpec, model_registry
from .settings import AppSettings, MatchingConfig, ModelConfig, settings

__all__ = [
    "settings",
    "AppSettings",
    "MatchingConfig",
    "ModelConfig",
    "model_registry",
    "DynamicModelRegistry",
    "SiglipModelSpec",
]
