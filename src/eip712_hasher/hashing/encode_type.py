"""
Canonical ``encodeType`` rendering.

> The type of a struct is encoded as
> ``name ‖ "(" ‖ member₁ ‖ "," ‖ member₂ ‖ "," ‖ … ‖ memberₙ ")"``
> where each member is written as ``type ‖ " " ‖ name``.
> If the struct type references other struct types, the set of referenced
> struct types is collected, sorted by name and appended to the encoding.
"""

from typing import Mapping

from eth_utils import keccak

from .resolver import referenced_structs
from .types import StructType


def encode_struct(struct_type: StructType) -> str:
    """Render a single struct definition, e.g. ``Person(string name,address wallet)``."""
    return f"{struct_type.name}({','.join(str(member) for member in struct_type.members)})"


def encode_type(primary_type: str, struct_types: Mapping[str, StructType]) -> str:
    """Render ``primary_type`` followed by every dependency in sorted order."""
    return "".join(
        encode_struct(struct_type)
        for struct_type in referenced_structs(primary_type, struct_types)
    )


def hash_type(primary_type: str, struct_types: Mapping[str, StructType]) -> bytes:
    """``keccak256(encodeType(primary_type))``."""
    return keccak(text=encode_type(primary_type, struct_types))
