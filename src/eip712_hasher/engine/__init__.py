from .exceptions import (
    TypedDataError,
    SchemaError,
    TypedValueError,
    EncodingError,
    ConfigurationError,
    SignatureError,
)

__all__ = [
    "TypedDataError",
    "SchemaError",
    "TypedValueError",
    "EncodingError",
    "ConfigurationError",
    "SignatureError",
]
