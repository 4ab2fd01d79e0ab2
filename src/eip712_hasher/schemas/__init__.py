from .bases import CanonicalModel
from .typed_data import MemberType, EIP712Domain, TypedDataDocument

__all__ = [
    "CanonicalModel",
    "MemberType",
    "EIP712Domain",
    "TypedDataDocument",
]
