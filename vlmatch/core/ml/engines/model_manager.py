from typing import Any

from vlmatch.core.ml.models import SimilarityModelFactory
from vlmatch.core.ml.models.base import SimilarityModel
from vlmatch.log import get_logger

logger = get_logger(__name__)


class ModelManager:
    """
    Manages similarity model lifecycle and caching.

    - Create models on demand
    - Cache model instances per variant, device and overrides
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if not self._initialized:
            self._models: dict[str, SimilarityModel] = {}
            self._initialized = True

    @staticmethod
    def _cache_key(config_name: str, device: str | None = None, **model_kwargs: Any) -> str:
        overrides = ",".join(f"{key}={value}" for key, value in sorted(model_kwargs.items()) if value is not None)
        return f"{config_name}:{device or 'auto'}:{overrides}"

    def get_model(self, config_name: str, device: str | None = None, **model_kwargs: Any) -> SimilarityModel:
        """
        Get or create a similarity model for the given configuration.

        Args:
            config_name: Model variant name
            device: Device for computation
            **model_kwargs: Additional model arguments

        Returns:
            SimilarityModel instance
        """
        cache_key = self._cache_key(config_name, device, **model_kwargs)

        if cache_key not in self._models:
            logger.info(f"Creating new model for config: {config_name}")
            self._models[cache_key] = SimilarityModelFactory.create_model(config_name, device=device, **model_kwargs)
            logger.info(f"Model created: {self._models[cache_key].model_name}")

        return self._models[cache_key]

    def has_model(self, config_name: str, device: str | None = None, **model_kwargs: Any) -> bool:
        """Check if model exists in cache."""
        return self._cache_key(config_name, device, **model_kwargs) in self._models

    def clear_cache(self) -> None:
        """Clear all cached models."""
        logger.info(f"Clearing {len(self._models)} cached models")
        self._models.clear()


def get_model_manager() -> ModelManager:
    """Get the global ModelManager singleton instance."""
    return ModelManager()
