import logging
from pathlib import Path
import time

import torch
from transformers import AutoConfig, AutoModel, AutoTokenizer, PreTrainedTokenizerFast

from vlmatch.core.exceptions import ConfigError, ExternalModelError
from vlmatch.core.ml.models.base import SimilarityModel
from vlmatch.core.ml.utils.types import ModelDimensions, ScoringOutput

logger = logging.getLogger(__name__)


class SiglipSimilarityModel(SimilarityModel):
    """
    SigLIP scoring backend built on Hugging Face transformers.

    Weights, config and tokenizer come from a hub repository unless local
    overrides are given: ``model_dir`` for weights, ``config_path`` for a
    config.json (file or directory) and ``tokenizer_path`` for a
    tokenizer.json file or tokenizer directory.
    """

    def __init__(
        self,
        hf_repo: str = "google/siglip-base-patch16-224",
        model_dir: str | None = None,
        config_path: str | None = None,
        tokenizer_path: str | None = None,
        device: str | None = None,
        cache_dir: str | None = None,
        model_config: str = "v1-base-patch16-224",
    ):
        super().__init__(hf_repo, device, model_config)
        self.hf_repo = hf_repo
        self.model_dir = model_dir
        self.config_path = config_path
        self.tokenizer_path = tokenizer_path
        self.cache_dir = cache_dir

        load_start_time = time.time()

        self.config = self._load_config()
        self._dimensions = self.dimensions_from_config(self.config)
        self._tokenizer = self._load_tokenizer()
        self.model = self._load_model()
        self._model_loaded = True

        logger.info(f"Model {self.model_name} loaded in {time.time() - load_start_time:.2f}s")

    @property
    def model_source(self) -> str:
        return self.model_dir or self.hf_repo

    @property
    def dimensions(self) -> ModelDimensions:
        return self._dimensions

    @property
    def tokenizer(self) -> PreTrainedTokenizerFast:
        return self._tokenizer

    @staticmethod
    def dimensions_from_config(config) -> ModelDimensions:
        """Read the preprocessing fields from a SigLIP config"""
        try:
            values = {
                "image_size": config.vision_config.image_size,
                "pad_token_id": config.text_config.pad_token_id,
                "max_position_embeddings": config.text_config.max_position_embeddings,
            }
        except AttributeError as e:
            raise ConfigError(f"Model config is missing a required field: {e}") from e

        for name, value in values.items():
            minimum = 0 if name == "pad_token_id" else 1
            if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
                raise ConfigError(f"Invalid model config value {name}={value!r}")

        return ModelDimensions(**values)

    def _load_config(self):
        source = self.config_path or self.model_source
        try:
            return AutoConfig.from_pretrained(source, cache_dir=self.cache_dir)
        except Exception as e:
            raise ConfigError(f"Failed to load model config from {source}: {e}") from e

    def _load_tokenizer(self):
        source = self.tokenizer_path or self.model_source
        try:
            if Path(source).suffix == ".json":
                return PreTrainedTokenizerFast(tokenizer_file=source)
            return AutoTokenizer.from_pretrained(source, cache_dir=self.cache_dir)
        except Exception as e:
            raise ExternalModelError(f"Failed to load tokenizer from {source}: {e}") from e

    def _load_model(self):
        try:
            model = AutoModel.from_pretrained(self.model_source, config=self.config, cache_dir=self.cache_dir)
            return model.to(self.device).eval()
        except Exception as e:
            logger.error(f"Failed to load model {self.model_source}: {e}")
            raise ExternalModelError(f"Failed to load model {self.model_source}: {e}") from e

    def score(self, images: torch.Tensor, input_ids: torch.Tensor) -> ScoringOutput:
        model_inputs = {
            "input_ids": input_ids.to(self.device),
            "pixel_values": images.to(self.device),
        }
        # Position embeddings are sized for the checkpoint's resolution
        if tuple(images.shape[-2:]) != (self._dimensions.image_size, self._dimensions.image_size):
            logger.debug(
                f"Interpolating position embeddings from {self._dimensions.image_size}px "
                f"to {tuple(images.shape[-2:])}"
            )
            model_inputs["interpolate_pos_encoding"] = True

        try:
            with torch.no_grad():
                outputs = self.model(**model_inputs)
        except torch.cuda.OutOfMemoryError as e:
            logger.error(f"CUDA OOM during inference: {e}")
            raise ExternalModelError("Out of memory during inference. Try fewer images or a smaller image size.") from e
        except Exception as e:
            logger.error(f"Error during inference: {e}")
            raise ExternalModelError(f"Failed to compute similarity: {e}") from e

        return ScoringOutput(
            logits_per_text=outputs.logits_per_text.float().cpu(),
            logits_per_image=outputs.logits_per_image.float().cpu(),
        )

    def get_model_info(self) -> dict:
        """Get SigLIP-specific model information"""
        base_info = super().get_model_info()
        base_info.update(
            {
                "hf_repo": self.hf_repo,
                "model_dir": self.model_dir,
                "cache_dir": self.cache_dir,
                "image_size": self._dimensions.image_size,
                "max_position_embeddings": self._dimensions.max_position_embeddings,
            }
        )
        return base_info
