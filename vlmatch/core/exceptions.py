class ServiceError(Exception):
    """Base exception for pipeline errors with built-in exit code mapping"""

    exit_code: int = 1
    error_type: str = "service_error"


class ValidationError(ServiceError):
    """Invalid or empty pipeline inputs"""

    exit_code: int = 2
    error_type: str = "validation_error"


class ConfigError(ValidationError):
    """Missing or invalid model configuration fields"""

    exit_code: int = 3
    error_type: str = "config_error"


class DecodeError(ServiceError):
    """Unreadable or corrupt image file"""

    exit_code: int = 4
    error_type: str = "decode_error"


class ShapeMismatchError(ServiceError):
    """Inconsistent tensor shapes between pipeline stages"""

    exit_code: int = 5
    error_type: str = "shape_mismatch_error"


class TokenizationError(ServiceError):
    """Malformed text or tokenizer failure"""

    exit_code: int = 6
    error_type: str = "tokenization_error"


class ExternalModelError(ServiceError):
    """Model loading and inference errors"""

    exit_code: int = 7
    error_type: str = "external_model_error"
