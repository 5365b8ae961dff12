from unittest.mock import Mock, patch

import pytest

from vlmatch.core.exceptions import ConfigError
from vlmatch.core.ml.engines.model_manager import ModelManager, get_model_manager
from vlmatch.core.ml.models.factory import SimilarityModelFactory


@pytest.fixture
def mock_model_class():
    model_class = Mock()
    with patch.dict(SimilarityModelFactory._MODEL_REGISTRY, {"siglip": model_class}):
        yield model_class


@pytest.fixture
def model_manager():
    manager = ModelManager()
    manager.clear_cache()
    yield manager
    manager.clear_cache()


class TestSimilarityModelFactory:
    """Test model creation from registry variants"""

    def test_create_from_variant_name(self, mock_model_class):
        SimilarityModelFactory.create_model("v2-large-patch16-384", device="cpu")

        mock_model_class.assert_called_once_with(
            hf_repo="google/siglip2-large-patch16-384",
            model_config="v2-large-patch16-384",
            device="cpu",
        )

    def test_none_overrides_are_ignored(self, mock_model_class):
        SimilarityModelFactory.create_model("v1-base-patch16-224", hf_repo=None, model_dir="/models/siglip")

        kwargs = mock_model_class.call_args.kwargs
        assert kwargs["hf_repo"] == "google/siglip-base-patch16-224"
        assert kwargs["model_dir"] == "/models/siglip"

    def test_create_from_dict(self, mock_model_class):
        SimilarityModelFactory.create_model({"type": "siglip", "hf_repo": "me/my-siglip"})
        mock_model_class.assert_called_once_with(hf_repo="me/my-siglip")

    def test_unknown_variant(self):
        with pytest.raises(ConfigError, match="Unknown model config"):
            SimilarityModelFactory.create_model("v9-giant")

    def test_unknown_model_type(self):
        with pytest.raises(ConfigError, match="Unknown model type"):
            SimilarityModelFactory.create_model({"type": "unknown"})

    def test_register_model_type(self):
        custom_class = Mock()
        with patch.dict(SimilarityModelFactory._MODEL_REGISTRY):
            SimilarityModelFactory.register_model_type("custom", custom_class)
            SimilarityModelFactory.create_model({"type": "custom", "weights": "w.bin"})
        custom_class.assert_called_once_with(weights="w.bin")


class TestModelManager:
    """Test model caching"""

    def test_singleton(self):
        assert ModelManager() is get_model_manager()

    @patch("vlmatch.core.ml.engines.model_manager.SimilarityModelFactory.create_model")
    def test_models_are_cached(self, mock_create_model, model_manager):
        first = model_manager.get_model("v1-base-patch16-224", device="cpu")
        second = model_manager.get_model("v1-base-patch16-224", device="cpu")

        assert first is second
        mock_create_model.assert_called_once_with("v1-base-patch16-224", device="cpu")
        assert model_manager.has_model("v1-base-patch16-224", device="cpu")

    @patch("vlmatch.core.ml.engines.model_manager.SimilarityModelFactory.create_model")
    def test_overrides_change_cache_key(self, mock_create_model, model_manager):
        mock_create_model.side_effect = lambda *args, **kwargs: Mock()

        default = model_manager.get_model("v1-base-patch16-224")
        local = model_manager.get_model("v1-base-patch16-224", model_dir="/models/siglip")

        assert default is not local
        assert mock_create_model.call_count == 2
