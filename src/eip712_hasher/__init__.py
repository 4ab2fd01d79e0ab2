"""
EIP-712 typed structured data hashing.

    from eip712_hasher import TypedDataDocument

    document = TypedDataDocument.from_dict(payload)
    digest = document.hash()
"""

from .engine.exceptions import (
    TypedDataError,
    SchemaError,
    TypedValueError,
    EncodingError,
    ConfigurationError,
    SignatureError,
)
from .hashing import TypedDataHasher, encode_typed_data, hash_typed_data, parse_type
from .schemas import EIP712Domain, MemberType, TypedDataDocument
from .signing import (
    ECDSASignature,
    SignedTypedData,
    load_account,
    sign_typed_data,
    recover_typed_data_signer,
    verify_typed_data_signature,
)

__version__ = "0.1.0"

__all__ = [
    "TypedDataError",
    "SchemaError",
    "TypedValueError",
    "EncodingError",
    "ConfigurationError",
    "SignatureError",
    "TypedDataHasher",
    "encode_typed_data",
    "hash_typed_data",
    "parse_type",
    "EIP712Domain",
    "MemberType",
    "TypedDataDocument",
    "ECDSASignature",
    "SignedTypedData",
    "load_account",
    "sign_typed_data",
    "recover_typed_data_signer",
    "verify_typed_data_signature",
]
