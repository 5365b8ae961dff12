from dataclasses import asdict
from typing import Any

import torch

from vlmatch.constants import REPORT_PRECISION
from vlmatch.core.exceptions import ExternalModelError, ShapeMismatchError, ValidationError
from vlmatch.core.ml.utils.types import ImageMatches, ProbabilityReport, TextMatch
from vlmatch.log import get_logger

logger = get_logger(__name__)


class ResultRanker:
    """
    Turns image-indexed logits into per-image text probabilities.

    Responsibilities:
    - Row-wise softmax over the text axis
    - Scaling to percentages
    - Regrouping the row-major flat vector back into one group per image
    - Pairing each probability with its text, in input order
    """

    @staticmethod
    def softmax(logits: torch.Tensor) -> torch.Tensor:
        """Numerically stable softmax along dim 1"""
        shifted = logits - logits.max(dim=1, keepdim=True).values
        exponentials = shifted.exp()
        return exponentials / exponentials.sum(dim=1, keepdim=True)

    def rank(
        self,
        logits_per_image: torch.Tensor,
        image_names: list[str],
        texts: list[str],
    ) -> ProbabilityReport:
        """
        Build a probability report from an (N, M) logits matrix.

        Args:
            logits_per_image: Row i holds the scores of image i against every text
            image_names: N image identifiers, in batch order
            texts: M candidate texts, in column order

        Returns:
            ProbabilityReport with entries in input order (not sorted)
        """
        logits = torch.as_tensor(logits_per_image, dtype=torch.float32)

        if not image_names or not texts:
            raise ValidationError("Ranking needs at least one image and one text")
        if logits.dim() != 2:
            raise ShapeMismatchError(f"Expected a 2-D logits matrix, got shape {tuple(logits.shape)}")
        if tuple(logits.shape) != (len(image_names), len(texts)):
            raise ShapeMismatchError(
                f"Logits shape {tuple(logits.shape)} does not match "
                f"{len(image_names)} images x {len(texts)} texts"
            )
        if not torch.isfinite(logits).all():
            raise ExternalModelError("Model returned non-finite logits")

        softmax_image = self.softmax(logits)
        softmax_image_vec = softmax_image.flatten().tolist()
        logger.debug(f"softmax_image_vec: {softmax_image_vec}")

        probability_vec = [value * 100.0 for value in softmax_image_vec]
        probability_per_image = len(probability_vec) // len(image_names)

        images = []
        for i, image_name in enumerate(image_names):
            start = i * probability_per_image
            end = start + probability_per_image
            matches = [
                TextMatch(text=text, probability=probability)
                for text, probability in zip(texts, probability_vec[start:end], strict=True)
            ]
            images.append(ImageMatches(image_path=str(image_name), matches=matches))

        return ProbabilityReport(images=images, texts=list(texts))


def format_report(report: ProbabilityReport, top_k: int | None = None) -> str:
    """
    Render a report as plain text, one block per image.

    Entries keep input order unless top_k is given, in which case the k most
    probable texts are listed first.
    """
    lines = []
    for image in report:
        lines.append(f"\n\nResults for image: {image.image_path}\n")
        entries = image.matches if top_k is None else image.top_k(top_k)
        for match in entries:
            lines.append(f"Probability: {match.probability:.{REPORT_PRECISION}f}% Text: {match.text}")
    return "\n".join(lines)


def report_to_dict(report: ProbabilityReport, top_k: int | None = None) -> dict[str, Any]:
    """JSON-serializable view of a report"""
    images = []
    for image in report:
        entries = image.matches if top_k is None else image.top_k(top_k)
        images.append({"image_path": image.image_path, "matches": [asdict(match) for match in entries]})
    return {
        "texts": list(report.texts),
        "processing_time_ms": report.processing_time_ms,
        "images": images,
    }
