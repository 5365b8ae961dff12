from typing import Any, Protocol

import torch

from vlmatch.config.settings import OverflowPolicy
from vlmatch.core.exceptions import TokenizationError, ValidationError
from vlmatch.log import get_logger

logger = get_logger(__name__)


class SupportsEncode(Protocol):
    """Anything with a Hugging Face style ``encode`` method"""

    def encode(self, text: str, add_special_tokens: bool = True, **kwargs: Any) -> list[int]: ...


class TextTokenizer:
    """
    Turns candidate texts into a fixed-length (M, max_len) id batch.

    Encoding, including special tokens, is delegated to the wrapped
    tokenizer; this class only enforces the fixed length. Sequences longer
    than ``max_len`` either fail (``overflow_policy="error"``) or are cut to
    their first ``max_len`` ids (``overflow_policy="truncate"``).
    """

    def __init__(self, tokenizer: SupportsEncode, overflow_policy: OverflowPolicy = "error"):
        if overflow_policy not in ("error", "truncate"):
            raise ValidationError(f"Unknown overflow policy: {overflow_policy}")
        self.tokenizer = tokenizer
        self.overflow_policy = overflow_policy

    def encode(self, text: str) -> list[int]:
        """Natural (unpadded) token ids for one text"""
        if not isinstance(text, str):
            raise TokenizationError(f"Expected a string, got {type(text).__name__}")

        try:
            ids = self.tokenizer.encode(text, add_special_tokens=True)
        except Exception as e:
            raise TokenizationError(f"Failed to tokenize {text!r}: {e}") from e

        return [int(token_id) for token_id in ids]

    def pad(self, ids: list[int], max_len: int, pad_id: int) -> list[int]:
        """Right-pad (or truncate, per policy) ids to exactly max_len"""
        overflow = len(ids) - max_len
        if overflow > 0:
            if self.overflow_policy == "error":
                raise TokenizationError(
                    f"Sequence of {len(ids)} tokens exceeds the model limit of {max_len}"
                )
            logger.warning(f"Truncating sequence of {len(ids)} tokens to {max_len}")
            return ids[:max_len]

        return ids + [pad_id] * -overflow

    def tokenize(self, texts: list[str], max_len: int, pad_id: int) -> torch.Tensor:
        """
        Tokenize texts into an int64 tensor of shape (len(texts), max_len).

        Args:
            texts: Candidate texts, row order is kept
            max_len: Model positional-embedding capacity
            pad_id: Id used to fill trailing positions

        Returns:
            Padded token id batch
        """
        if not texts:
            raise ValidationError("At least one text is required")
        if max_len <= 0:
            raise ValidationError(f"max_len must be positive, got {max_len}")

        rows = [self.pad(self.encode(text), max_len, pad_id) for text in texts]
        return torch.tensor(rows, dtype=torch.int64)
