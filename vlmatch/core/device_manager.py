"""
Torch device selection for vlmatch models.
"""

from typing import Optional

import torch

from vlmatch.log import get_logger

logger = get_logger(__name__)


class DeviceManager:
    """Chooses where SigLIP inference runs"""

    @staticmethod
    def get_optimal_device(device: Optional[str] = None) -> torch.device:
        """
        Resolve the inference device.

        An explicit name ("cpu", "cuda:1", ...) is used as given; otherwise
        the first available of cuda, mps and cpu is picked.
        """
        if device:
            logger.debug(f"Using requested device: {device}")
            return torch.device(device)

        if torch.cuda.is_available():
            logger.info(f"Running inference on GPU: {torch.cuda.get_device_name()}")
            return torch.device("cuda")
        if hasattr(torch.backends, "mps") and torch.backends.mps.is_available():
            logger.info("Running inference on Apple MPS")
            return torch.device("mps")

        logger.info("Running inference on CPU")
        return torch.device("cpu")
