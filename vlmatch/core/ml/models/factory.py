from typing import Any

from vlmatch.config import model_registry
from vlmatch.core.exceptions import ConfigError
from vlmatch.core.ml.models.base import SimilarityModel
from vlmatch.core.ml.models.siglip_model import SiglipSimilarityModel


class SimilarityModelFactory:
    """Factory for creating similarity model instances"""

    # Model types registry
    _MODEL_REGISTRY: dict[str, type] = {
        "siglip": SiglipSimilarityModel,
    }

    @classmethod
    def register_model_type(cls, model_type: str, model_class: type) -> None:
        """Make another SimilarityModel implementation available by type name"""
        cls._MODEL_REGISTRY[model_type] = model_class

    @classmethod
    def create_model(cls, config_name_or_dict: str | dict[str, Any], **kwargs) -> SimilarityModel:
        """
        Create a similarity model from configuration.

        Args:
            config_name_or_dict: Registered variant name or a model configuration
            **kwargs: Overrides for config values (None values are ignored)

        Returns:
            Configured similarity model instance

        Raises:
            ConfigError: If the variant or model type is unknown
        """
        if isinstance(config_name_or_dict, str):
            config_name = config_name_or_dict
            spec = model_registry.get_model_spec(config_name)

            config = {
                "type": "siglip",
                "hf_repo": spec.hf_repo,
                "model_config": config_name,
            }
        else:
            config = config_name_or_dict.copy()

        config.update({key: value for key, value in kwargs.items() if value is not None})

        model_type = config.pop("type", "siglip")

        if model_type not in cls._MODEL_REGISTRY:
            raise ConfigError(f"Unknown model type: {model_type}. Available: {list(cls._MODEL_REGISTRY.keys())}")

        model_class = cls._MODEL_REGISTRY[model_type]
        return model_class(**config)
