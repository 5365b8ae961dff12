import time
from typing import Any

from vlmatch.config.settings import OverflowPolicy
from vlmatch.core.exceptions import ExternalModelError, ValidationError
from vlmatch.core.ml.models.base import SimilarityModel
from vlmatch.core.ml.preprocessing import ImageBatcher, ImageLoader, TextTokenizer
from vlmatch.core.ml.preprocessing.image_loader import ImageInput
from vlmatch.core.ml.utils.result_ranker import ResultRanker
from vlmatch.core.ml.utils.types import ProbabilityReport, ScoringOutput
from vlmatch.log import get_logger

from .base_matcher import AbstractMatcher
from .model_manager import ModelManager

logger = get_logger(__name__)


class ZeroShotMatcher(AbstractMatcher):
    """
    Runs the full image/text matching chain:
    load images -> batch -> tokenize texts -> score -> rank.

    Any stage failure aborts the run; there are no partial reports.
    """

    def __init__(
        self,
        model_config_name: str = "v1-base-patch16-224",
        device: str | None = None,
        image_size: int | None = None,
        overflow_policy: OverflowPolicy = "error",
        max_workers: int = 1,
        similarity_model: SimilarityModel | None = None,
        image_loader: ImageLoader | None = None,
        image_batcher: ImageBatcher | None = None,
        result_ranker: ResultRanker | None = None,
        **model_kwargs: Any,
    ):
        """
        Initialize matcher with pluggable components.

        Args:
            model_config_name: Registered model variant name
            device: Device for computation (auto-detected if None)
            image_size: Explicit image size, overrides the model config
            overflow_policy: "error" or "truncate" for over-long texts
            max_workers: Parallel image decoding threads
            similarity_model: Pre-built model (skips the model manager)
            image_loader: Optional image loader (creates default if None)
            image_batcher: Optional image batcher (creates default if None)
            result_ranker: Optional result ranker (creates default if None)
            **model_kwargs: Additional arguments passed to the similarity model
        """
        if image_size is not None and image_size <= 0:
            raise ValidationError(f"image_size must be positive, got {image_size}")

        self.model_config_name = model_config_name
        self.image_size_override = image_size

        self.similarity_model = similarity_model or ModelManager().get_model(
            model_config_name, device=device, **model_kwargs
        )
        self.image_loader = image_loader or ImageLoader(max_workers=max_workers)
        self.image_batcher = image_batcher or ImageBatcher()
        self.text_tokenizer = TextTokenizer(self.similarity_model.tokenizer, overflow_policy=overflow_policy)
        self.result_ranker = result_ranker or ResultRanker()

        logger.info(f"Initialized matcher with {self.similarity_model.model_name} model ({model_config_name} config)")

    @property
    def device(self):
        """Get device from underlying similarity model"""
        return self.similarity_model.device

    @property
    def model_config(self):
        """Get model config from underlying similarity model"""
        return self.similarity_model.model_config

    @property
    def image_size(self) -> int:
        """Explicit override if set, otherwise the model's configured size"""
        return self.image_size_override or self.similarity_model.dimensions.image_size

    def match(self, image_inputs: list[ImageInput], texts: list[str], **kwargs: Any) -> ProbabilityReport:
        if not image_inputs:
            raise ValidationError("At least one image is required")
        if not texts:
            raise ValidationError("At least one text is required")

        start_time = time.time()
        dimensions = self.similarity_model.dimensions

        # Step 1: Load and batch images
        tensors = self.image_loader.load_many(list(image_inputs), self.image_size)
        images = self.image_batcher.batch(tensors)
        logger.debug(f"Image batch shape: {tuple(images.shape)}")

        # Step 2: Tokenize texts to the model's fixed length
        input_ids = self.text_tokenizer.tokenize(
            list(texts), dimensions.max_position_embeddings, dimensions.pad_token_id
        )
        preprocessing_time = (time.time() - start_time) * 1000

        # Step 3: Run model inference
        output = self.similarity_model.score(images, input_ids)
        self._check_output(output, len(image_inputs), len(texts))
        inference_time = (time.time() - start_time) * 1000 - preprocessing_time

        # Step 4: Rank
        image_names = [str(image_input) for image_input in image_inputs]
        report = self.result_ranker.rank(output.logits_per_image, image_names, list(texts))
        report.processing_time_ms = (time.time() - start_time) * 1000

        logger.info(
            f"Matched {len(image_inputs)} images x {len(texts)} texts in {report.processing_time_ms:.1f}ms "
            f"(preprocessing {preprocessing_time:.1f}ms, inference {inference_time:.1f}ms)"
        )
        return report

    @staticmethod
    def _check_output(output: ScoringOutput, num_images: int, num_texts: int) -> None:
        """Reject logits that are not oriented (N, M) / (M, N)"""
        if tuple(output.logits_per_image.shape) != (num_images, num_texts):
            raise ExternalModelError(
                f"logits_per_image has shape {tuple(output.logits_per_image.shape)}, "
                f"expected ({num_images}, {num_texts})"
            )
        if tuple(output.logits_per_text.shape) != (num_texts, num_images):
            raise ExternalModelError(
                f"logits_per_text has shape {tuple(output.logits_per_text.shape)}, "
                f"expected ({num_texts}, {num_images})"
            )
