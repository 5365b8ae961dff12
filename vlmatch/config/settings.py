from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from vlmatch.constants import ENV_PREFIX

OverflowPolicy = Literal["error", "truncate"]


class ModelConfig(BaseModel):
    """Model loading configuration"""

    cache_dir: str | None = None
    device: str | None = None
    registry_file: str = "./config/models.json"


class MatchingConfig(BaseModel):
    """Pipeline defaults used when the caller supplies nothing"""

    default_variant: str = "v1-base-patch16-224"
    default_images: list[str] = Field(
        default_factory=lambda: [
            "assets/stable-diffusion-xl.jpg",
            "assets/bike.jpg",
        ]
    )
    default_texts: list[str] = Field(
        default_factory=lambda: [
            "a cycling race",
            "a photo of two cats",
            "a robot holding a candle",
        ]
    )
    image_size: int | None = Field(default=None, gt=0)
    overflow_policy: OverflowPolicy = "error"
    max_workers: int = Field(default=1, ge=1)


class AppSettings(BaseSettings):
    """Application settings, overridable through VLMATCH_* environment variables"""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = False
    log_level: str = "INFO"

    # Sub-configurations
    model: ModelConfig = Field(default_factory=ModelConfig)
    matching: MatchingConfig = Field(default_factory=MatchingConfig)


# Global settings instance
settings = AppSettings()
