import torch

from vlmatch.core.exceptions import ShapeMismatchError, ValidationError


class ImageBatcher:
    """Stacks per-image tensors into one (N, C, H, W) batch in input order"""

    @staticmethod
    def batch(tensors: list[torch.Tensor]) -> torch.Tensor:
        if not tensors:
            raise ValidationError("Cannot build an image batch from zero images")

        expected_shape = tuple(tensors[0].shape)
        for index, tensor in enumerate(tensors):
            if tuple(tensor.shape) != expected_shape:
                raise ShapeMismatchError(
                    f"Image tensor {index} has shape {tuple(tensor.shape)}, expected {expected_shape}"
                )

        return torch.stack(list(tensors), dim=0)
