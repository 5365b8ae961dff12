from concurrent.futures import ThreadPoolExecutor
import math
from pathlib import Path

from PIL import Image
import torch

from vlmatch.constants import PIXEL_MAX
from vlmatch.core.exceptions import DecodeError, ValidationError
from vlmatch.log import get_logger

logger = get_logger(__name__)

ImageInput = str | Path | Image.Image


def _round_half_away(value: float) -> int:
    return int(math.floor(value + 0.5))


class ImageLoader:
    """
    Decodes images and turns them into normalized channel-first tensors.

    Every image goes through the same resize-to-fill, so a batch of tensors
    produced with one ``image_size`` can always be stacked.
    """

    def __init__(self, max_workers: int = 1):
        """
        Args:
            max_workers: Thread pool size for load_many (1 loads sequentially)
        """
        self.max_workers = max(1, max_workers)

    def load(self, image_input: ImageInput, image_size: int) -> torch.Tensor:
        """
        Load an image as a (3, image_size, image_size) float32 tensor in [-1, 1].

        Raises:
            DecodeError: If the file cannot be read or decoded
        """
        if not isinstance(image_size, int) or image_size <= 0:
            raise ValidationError(f"image_size must be a positive integer, got {image_size!r}")

        image = self.decode(image_input)
        image = self.resize_to_fill(image, image_size)
        return self.to_tensor(image)

    def load_many(self, image_inputs: list[ImageInput], image_size: int) -> list[torch.Tensor]:
        """
        Load several images, keeping input order.

        The first failure (in input order) aborts the whole batch.
        """
        logger.debug(f"Loading {len(image_inputs)} images at {image_size}x{image_size}")
        if self.max_workers == 1 or len(image_inputs) <= 1:
            return [self.load(image_input, image_size) for image_input in image_inputs]

        with ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="image_") as executor:
            return list(executor.map(lambda image_input: self.load(image_input, image_size), image_inputs))

    @staticmethod
    def decode(image_input: ImageInput) -> Image.Image:
        """Decode a file (or take a PIL image) as 8-bit RGB, dropping alpha"""
        if isinstance(image_input, Image.Image):
            return image_input.convert("RGB")

        try:
            file_path = Path(image_input)
            if not file_path.is_file():
                raise FileNotFoundError(f"Image file not found: {image_input}")

            with Image.open(file_path) as image:
                return image.convert("RGB")

        except Exception as e:
            raise DecodeError(f"Failed to load image from file {image_input}: {e}") from e

    @staticmethod
    def resize_to_fill(image: Image.Image, size: int) -> Image.Image:
        """
        Scale the image so it covers a size x size square, then center-crop.

        Aspect ratio is kept and excess content is discarded (no letterboxing).
        """
        width, height = image.size
        ratio = max(size / width, size / height)
        scaled_width = max(_round_half_away(width * ratio), 1)
        scaled_height = max(_round_half_away(height * ratio), 1)

        resized = image.resize((scaled_width, scaled_height), resample=Image.Resampling.BILINEAR)

        if scaled_height > scaled_width:
            top = (scaled_height - size) // 2
            box = (0, top, size, top + size)
        else:
            left = (scaled_width - size) // 2
            box = (left, 0, left + size, size)

        return resized.crop(box)

    @staticmethod
    def to_tensor(image: Image.Image) -> torch.Tensor:
        """Reinterpret the RGB byte buffer as (H, W, 3) and normalize to (3, H, W)"""
        width, height = image.size
        pixels = torch.frombuffer(bytearray(image.tobytes()), dtype=torch.uint8)
        pixels = pixels.reshape(height, width, 3).permute(2, 0, 1)

        # (x * 2) / 255 keeps both ends exact at -1 and +1
        return pixels.to(torch.float32) * 2.0 / PIXEL_MAX - 1.0
