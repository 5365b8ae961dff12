from .device_manager import DeviceManager
from .exceptions import (
    ConfigError,
    DecodeError,
    ExternalModelError,
    ServiceError,
    ShapeMismatchError,
    TokenizationError,
    ValidationError,
)

__all__ = [
    "DeviceManager",
    "ServiceError",
    "ValidationError",
    "ConfigError",
    "DecodeError",
    "ShapeMismatchError",
    "TokenizationError",
    "ExternalModelError",
]
