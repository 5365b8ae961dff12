"""ML Preprocessing module - Image and text preparation."""

from .image_batcher import ImageBatcher
from .image_loader import ImageLoader
from .text_tokenizer import TextTokenizer

__all__ = [
    "ImageBatcher",
    "ImageLoader",
    "TextTokenizer",
]
