import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError as PydanticValidationError

from vlmatch.config.settings import AppSettings


class TestAppSettings:
    """Test settings defaults and environment overrides"""

    def test_defaults(self):
        settings = AppSettings(_env_file=None)

        assert settings.log_level == "INFO"
        assert settings.matching.default_variant == "v1-base-patch16-224"
        assert settings.matching.default_texts == [
            "a cycling race",
            "a photo of two cats",
            "a robot holding a candle",
        ]
        assert len(settings.matching.default_images) == 2
        assert settings.matching.image_size is None
        assert settings.matching.overflow_policy == "error"
        assert settings.model.device is None

    def test_nested_env_overrides(self):
        env = {
            "VLMATCH_LOG_LEVEL": "DEBUG",
            "VLMATCH_MATCHING__OVERFLOW_POLICY": "truncate",
            "VLMATCH_MATCHING__IMAGE_SIZE": "256",
            "VLMATCH_MODEL__DEVICE": "cpu",
        }
        with patch.dict(os.environ, env):
            settings = AppSettings(_env_file=None)

        assert settings.log_level == "DEBUG"
        assert settings.matching.overflow_policy == "truncate"
        assert settings.matching.image_size == 256
        assert settings.model.device == "cpu"

    def test_invalid_overflow_policy(self):
        with patch.dict(os.environ, {"VLMATCH_MATCHING__OVERFLOW_POLICY": "wrap"}):
            with pytest.raises(PydanticValidationError):
                AppSettings(_env_file=None)
