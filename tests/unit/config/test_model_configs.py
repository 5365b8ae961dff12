import json
import os
from unittest.mock import patch

import pytest

from vlmatch.config import DynamicModelRegistry, SiglipModelSpec
from vlmatch.core.exceptions import ConfigError


@pytest.fixture
def registry(tmp_path):
    """Registry without a config file"""
    return DynamicModelRegistry(config_file_path=str(tmp_path / "missing.json"))


@pytest.fixture
def sample_file_config():
    return {
        "models": {
            "custom": {
                "hf_repo": "me/siglip-finetuned",
                "description": "Fine-tuned SigLIP",
            },
            "v1-base-patch16-224": {
                "hf_repo": "google/siglip-base-patch16-224",
                "description": "Disabled default",
                "enabled": False,
            },
        }
    }


class TestDynamicModelRegistry:
    """Test model registry sources and lookups"""

    def test_default_variants(self, registry):
        available = registry.list_available_models()

        assert len(available) == 8
        assert registry.get_model_spec("v1-base-patch16-224").hf_repo == "google/siglip-base-patch16-224"
        assert registry.get_model_spec("v2-large-patch16-512").hf_repo == "google/siglip2-large-patch16-512"

    def test_unknown_variant(self, registry):
        with pytest.raises(ConfigError, match="Unknown model config"):
            registry.get_model_spec("nope")

    def test_load_from_file(self, tmp_path, sample_file_config):
        config_file = tmp_path / "models.json"
        config_file.write_text(json.dumps(sample_file_config))

        registry = DynamicModelRegistry(config_file_path=str(config_file))

        assert registry.get_model_spec("custom") == SiglipModelSpec(
            hf_repo="me/siglip-finetuned", description="Fine-tuned SigLIP"
        )
        with pytest.raises(ConfigError, match="disabled"):
            registry.get_model_spec("v1-base-patch16-224")
        assert "v1-base-patch16-224" not in registry.list_available_models()
        assert "v1-base-patch16-224" in registry.list_all_models()

    def test_invalid_file_is_ignored(self, tmp_path):
        config_file = tmp_path / "models.json"
        config_file.write_text("{not json")

        registry = DynamicModelRegistry(config_file_path=str(config_file))

        assert len(registry.list_available_models()) == 8

    def test_invalid_spec_is_skipped(self, tmp_path):
        config_file = tmp_path / "models.json"
        config_file.write_text(json.dumps({"models": {"broken": {"repo": "missing-fields"}}}))

        registry = DynamicModelRegistry(config_file_path=str(config_file))

        assert "broken" not in registry.list_all_models()

    def test_load_from_env(self, tmp_path):
        env_config = {"models": {"env_model": {"hf_repo": "env/siglip", "description": "From env"}}}

        with patch.dict(os.environ, {"MODEL_CONFIG_EXTRA": json.dumps(env_config)}):
            registry = DynamicModelRegistry(config_file_path=str(tmp_path / "missing.json"))

        assert registry.get_model_spec("env_model").hf_repo == "env/siglip"

    @pytest.mark.parametrize("content", [[], {"models": ["x"]}, {"models": {"odd": "not-an-object"}}])
    def test_malformed_file_is_ignored(self, tmp_path, content):
        config_file = tmp_path / "models.json"
        config_file.write_text(json.dumps(content))

        registry = DynamicModelRegistry(config_file_path=str(config_file))

        assert len(registry.list_all_models()) == 8

    @pytest.mark.parametrize("value", ["[1, 2]", '{"models": ["x"]}', '"just a string"'])
    def test_malformed_env_is_ignored(self, tmp_path, value):
        with patch.dict(os.environ, {"MODEL_CONFIG_EXTRA": value}):
            registry = DynamicModelRegistry(config_file_path=str(tmp_path / "missing.json"))

        assert len(registry.list_all_models()) == 8

    def test_defaults_are_not_mutated(self, tmp_path, sample_file_config):
        config_file = tmp_path / "models.json"
        config_file.write_text(json.dumps(sample_file_config))

        DynamicModelRegistry(config_file_path=str(config_file))

        assert DynamicModelRegistry.DEFAULT_MODELS["v1-base-patch16-224"].enabled
