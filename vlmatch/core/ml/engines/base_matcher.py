from abc import ABC, abstractmethod
from typing import Any

from vlmatch.core.ml.preprocessing.image_loader import ImageInput
from vlmatch.core.ml.utils.types import ProbabilityReport


class AbstractMatcher(ABC):
    """
    Abstract base class for zero-shot matching implementations.

    Extension pattern:
    1. Inherit from AbstractMatcher
    2. Implement match
    3. Add any model-specific initialization and utilities
    """

    @abstractmethod
    def match(self, image_inputs: list[ImageInput], texts: list[str], **kwargs: Any) -> ProbabilityReport:
        """
        Score every image against every candidate text.

        Args:
            image_inputs: Image sources (file paths or PIL Images)
            texts: Candidate text descriptions
            **kwargs: Implementation-specific arguments

        Returns:
            ProbabilityReport with one entry per image
        """
        pass

    @property
    @abstractmethod
    def device(self):
        """Get the device used by this matcher."""
        pass

    @property
    @abstractmethod
    def model_config(self):
        """Get the model configuration used by this matcher."""
        pass
