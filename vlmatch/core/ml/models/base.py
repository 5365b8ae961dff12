from abc import ABC, abstractmethod

import torch

from vlmatch.core.device_manager import DeviceManager
from vlmatch.core.ml.preprocessing.text_tokenizer import SupportsEncode
from vlmatch.core.ml.utils.types import ModelDimensions, ScoringOutput


class SimilarityModel(ABC):
    """
    Abstract base class for vision-language scoring models.

    A model is a single capability, ``score(images, input_ids)``, plus the
    read-only configuration and tokenizer preprocessing needs. Any backend
    honouring this contract can be plugged into the matcher.
    """

    def __init__(self, model_name: str, device: str | None = None, model_config: str = "custom"):
        self.model_name = model_name
        self.device = DeviceManager.get_optimal_device(device)
        self.model_config = model_config
        self._model_loaded = False

    @property
    @abstractmethod
    def dimensions(self) -> ModelDimensions:
        """Image size, pad token id and text capacity expected by the model"""
        pass

    @property
    @abstractmethod
    def tokenizer(self) -> SupportsEncode:
        """Tokenizer matching the model vocabulary"""
        pass

    @abstractmethod
    def score(self, images: torch.Tensor, input_ids: torch.Tensor) -> ScoringOutput:
        """
        Compute pairwise similarity logits.

        Args:
            images: Float batch of shape (N, 3, H, W)
            input_ids: Token id batch of shape (M, max_len)

        Returns:
            ScoringOutput with logits_per_text (M, N) and logits_per_image (N, M)
        """
        pass

    def is_available(self) -> bool:
        """Check if model is loaded and ready for inference"""
        return self._model_loaded

    def get_model_info(self) -> dict:
        """Get model metadata for diagnostics"""
        return {
            "model_name": self.model_name,
            "device": str(self.device),
            "model_config": self.model_config,
            "is_loaded": self._model_loaded,
        }
