from dataclasses import dataclass, field

import torch


@dataclass(frozen=True)
class ModelDimensions:
    """Read-only model configuration consumed by preprocessing"""

    image_size: int
    pad_token_id: int
    max_position_embeddings: int


@dataclass(frozen=True)
class ScoringOutput:
    """Pairwise similarity logits returned by a scoring model"""

    logits_per_text: torch.Tensor
    logits_per_image: torch.Tensor


@dataclass(frozen=True)
class TextMatch:
    text: str
    probability: float


@dataclass
class ImageMatches:
    """Per-image probabilities, one entry per text in input order"""

    image_path: str
    matches: list[TextMatch] = field(default_factory=list)

    def top_k(self, k: int | None = None) -> list[TextMatch]:
        """Entries sorted by descending probability, optionally cut to k"""
        ranked = sorted(self.matches, key=lambda match: match.probability, reverse=True)
        return ranked if k is None else ranked[:k]

    @property
    def total_probability(self) -> float:
        return sum(match.probability for match in self.matches)


@dataclass
class ProbabilityReport:
    """Matching outcome for a whole batch, images in input order"""

    images: list[ImageMatches]
    texts: list[str]
    processing_time_ms: float = 0.0

    def __iter__(self):
        return iter(self.images)

    def __len__(self) -> int:
        return len(self.images)
