from .types import (
    Atomic,
    Custom,
    Array,
    TypeRef,
    Member,
    StructType,
    parse_type,
    build_struct_types,
)
from .resolver import find_dependencies, referenced_structs
from .encode_type import encode_struct, encode_type, hash_type
from .encode_data import encode_field, encode_data
from .hasher import TypedDataHasher, encode_typed_data, hash_typed_data

__all__ = [
    "Atomic",
    "Custom",
    "Array",
    "TypeRef",
    "Member",
    "StructType",
    "parse_type",
    "build_struct_types",
    "find_dependencies",
    "referenced_structs",
    "encode_struct",
    "encode_type",
    "hash_type",
    "encode_field",
    "encode_data",
    "TypedDataHasher",
    "encode_typed_data",
    "hash_typed_data",
]
