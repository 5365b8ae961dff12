from dataclasses import asdict, dataclass
import json
import os
from pathlib import Path
from typing import Any

from vlmatch.config.settings import settings
from vlmatch.core.exceptions import ConfigError
from vlmatch.log import get_logger

logger = get_logger(__name__)


@dataclass
class SiglipModelSpec:
    """SigLIP model specification"""

    hf_repo: str
    description: str
    enabled: bool = True


class DynamicModelRegistry:
    """
    Registry that can load model configurations from multiple sources:
    1. Built-in configurations (fallback)
    2. JSON file
    3. Environment variables
    """

    DEFAULT_MODELS = {
        "v1-base-patch16-224": SiglipModelSpec(
            hf_repo="google/siglip-base-patch16-224",
            description="SigLIP base, 224px",
        ),
        "v2-base-patch16-224": SiglipModelSpec(
            hf_repo="google/siglip2-base-patch16-224",
            description="SigLIP 2 base, 224px",
        ),
        "v2-base-patch16-256": SiglipModelSpec(
            hf_repo="google/siglip2-base-patch16-256",
            description="SigLIP 2 base, 256px",
        ),
        "v2-base-patch16-384": SiglipModelSpec(
            hf_repo="google/siglip2-base-patch16-384",
            description="SigLIP 2 base, 384px",
        ),
        "v2-base-patch16-512": SiglipModelSpec(
            hf_repo="google/siglip2-base-patch16-512",
            description="SigLIP 2 base, 512px",
        ),
        "v2-large-patch16-256": SiglipModelSpec(
            hf_repo="google/siglip2-large-patch16-256",
            description="SigLIP 2 large, 256px",
        ),
        "v2-large-patch16-384": SiglipModelSpec(
            hf_repo="google/siglip2-large-patch16-384",
            description="SigLIP 2 large, 384px",
        ),
        "v2-large-patch16-512": SiglipModelSpec(
            hf_repo="google/siglip2-large-patch16-512",
            description="SigLIP 2 large, 512px",
        ),
    }

    def __init__(self, config_file_path: str | None = None):
        self.config_file_path = config_file_path or settings.model.registry_file
        self._models: dict[str, SiglipModelSpec] = {}
        self._load_configurations()

    def _load_configurations(self):
        """Load configurations from multiple sources in priority order"""
        self._models = self.DEFAULT_MODELS.copy()

        self._load_from_file()

        self._load_from_env()

        logger.debug(f"Loaded {len(self._models)} model configurations")

    def _register_models(self, source: str, config: Any) -> None:
        models = config.get("models", {}) if isinstance(config, dict) else None
        if not isinstance(models, dict):
            logger.warning(f"Ignoring {source}: expected an object of the form {{\"models\": {{...}}}}")
            return

        for name, spec_dict in models.items():
            if not isinstance(spec_dict, dict):
                logger.error(f"Invalid model spec for {name} in {source}: expected an object")
                continue
            try:
                self._models[name] = SiglipModelSpec(**spec_dict)
                logger.info(f"Loaded model config from {source}: {name}")
            except TypeError as e:
                logger.error(f"Invalid model spec for {name} in {source}: {e}")

    def _load_from_file(self):
        """Load from JSON file"""
        config_path = Path(self.config_file_path)
        if not config_path.exists():
            return

        try:
            with open(config_path) as f:
                file_config = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not load config from {self.config_file_path}: {e}")
            return

        self._register_models(str(config_path), file_config)

    def _load_from_env(self):
        """Load from MODEL_CONFIG_<NAME> environment variables"""
        for env_var in os.environ:
            if not env_var.startswith("MODEL_CONFIG_"):
                continue
            try:
                env_config = json.loads(os.environ[env_var])
            except json.JSONDecodeError as e:
                logger.error(f"Invalid JSON in {env_var}: {e}")
                continue

            self._register_models(env_var, env_config)

    def get_model_spec(self, config_name: str) -> SiglipModelSpec:
        """Get model specification by name"""
        if config_name not in self._models:
            raise ConfigError(f"Unknown model config: {config_name}. Available: {list(self._models.keys())}")

        spec = self._models[config_name]
        if not spec.enabled:
            raise ConfigError(f"Model config {config_name} is disabled")

        return spec

    def list_available_models(self) -> dict[str, dict[str, Any]]:
        """List all available and enabled model configurations"""
        return {name: asdict(spec) for name, spec in self._models.items() if spec.enabled}

    def list_all_models(self) -> dict[str, dict[str, Any]]:
        """List all model configurations (including disabled)"""
        return {name: asdict(spec) for name, spec in self._models.items()}


# Global registry instance
model_registry = DynamicModelRegistry()
