"""
EIP-712 Type Descriptors

Parses the type strings declared in a typed data schema into structured
references and validates struct definitions.

A reference is one of three frozen dataclasses:

* ``Atomic``  -- ``bool``, ``address``, ``string``, ``bytes``, ``bytesN``,
  ``uintN``, ``intN``
* ``Custom``  -- a struct defined elsewhere in the type table
* ``Array``   -- an element reference plus an optional fixed length

``str()`` of any reference reproduces the canonical type string, so the
canonical ``encodeType`` rendering never needs the declared text.
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, Iterator, Mapping, Optional, Sequence, Tuple, Union

from ..engine.exceptions import SchemaError

_IDENT_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")
_INTEGER_RE = re.compile(r"^(u?int)([0-9]*)$")
_FIXED_BYTES_RE = re.compile(r"^bytes([0-9]+)$")
_ARRAY_SUFFIX_RE = re.compile(r"^(.*)\[([^\[\]]*)\]$")
_ARRAY_LENGTH_RE = re.compile(r"^[1-9][0-9]*$")

INTEGER_WIDTHS: Tuple[int, ...] = tuple(range(8, 257, 8))
FIXED_BYTES_SIZES: Tuple[int, ...] = tuple(range(1, 33))

ATOMIC_TYPES = frozenset(
    ["bool", "address", "string", "bytes"]
    + [f"bytes{n}" for n in FIXED_BYTES_SIZES]
    + [f"uint{n}" for n in INTEGER_WIDTHS]
    + [f"int{n}" for n in INTEGER_WIDTHS]
)


@dataclass(frozen=True)
class Atomic:
    """Built-in Solidity type."""
    kind: str

    def __str__(self) -> str:
        return self.kind

    @property
    def is_dynamic(self) -> bool:
        """``bytes`` and ``string`` are hashed rather than padded."""
        return self.kind in ("bytes", "string")

    @property
    def is_signed(self) -> bool:
        return self.kind.startswith("int")

    @property
    def bits(self) -> Optional[int]:
        """Bit width of ``uintN`` / ``intN``; ``None`` for other kinds."""
        match = _INTEGER_RE.match(self.kind)
        return int(match.group(2)) if match else None

    @property
    def size(self) -> Optional[int]:
        """Byte width of ``bytesN``; ``None`` for other kinds."""
        match = _FIXED_BYTES_RE.match(self.kind)
        return int(match.group(1)) if match else None


@dataclass(frozen=True)
class Custom:
    """Reference to a struct type by name."""
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Array:
    """Array of ``element``; ``length`` is ``None`` for dynamic arrays."""
    element: "TypeRef"
    length: Optional[int] = None

    def __str__(self) -> str:
        return f"{self.element}[{'' if self.length is None else self.length}]"


TypeRef = Union[Atomic, Custom, Array]


def parse_type(type_string: str) -> TypeRef:
    """
    Parse a declared type string into a ``TypeRef``.

    Array suffixes are stripped from the right, one per nesting level, so
    ``uint8[][3]`` is a fixed array of three dynamic ``uint8`` arrays.
    Base tokens that are neither atomic nor reserved integer/bytes spellings
    are treated as custom struct names; their existence is checked by the
    resolver, not here.

    Args:
        type_string: Type as declared in the schema (e.g. ``"Person[3]"``).

    Returns:
        The parsed ``Atomic``, ``Custom`` or ``Array`` reference.

    Raises:
        SchemaError: If the string is malformed or uses an invalid width.
    """
    if not isinstance(type_string, str):
        raise SchemaError(f"invalid type name {type_string!r}")
    return _parse_type(type_string)


@lru_cache(maxsize=1024)
def _parse_type(type_string: str) -> TypeRef:
    if not type_string:
        raise SchemaError(f"invalid type name {type_string!r}")

    match = _ARRAY_SUFFIX_RE.match(type_string)
    if match:
        element, length = match.groups()
        if length == "":
            return Array(_parse_type(element), None)
        if not _ARRAY_LENGTH_RE.match(length):
            raise SchemaError(f"invalid array length in type {type_string!r}")
        return Array(_parse_type(element), int(length))

    if type_string in ATOMIC_TYPES:
        return Atomic(type_string)

    match = _INTEGER_RE.match(type_string)
    if match:
        raise SchemaError(
            f"invalid integer type {type_string!r}: width must be one of 8, 16, ..., 256"
        )
    match = _FIXED_BYTES_RE.match(type_string)
    if match:
        raise SchemaError(
            f"invalid fixed bytes type {type_string!r}: size must be between 1 and 32"
        )

    if not _IDENT_RE.match(type_string):
        raise SchemaError(f"invalid type name {type_string!r}")
    return Custom(type_string)


def innermost(type_ref: TypeRef) -> TypeRef:
    """Strip every array level and return the element reference."""
    while isinstance(type_ref, Array):
        type_ref = type_ref.element
    return type_ref


def is_identifier(name: str) -> bool:
    """``True`` if ``name`` is a valid Solidity identifier."""
    return isinstance(name, str) and bool(_IDENT_RE.match(name))


@dataclass(frozen=True)
class Member:
    """One struct member: ``<type> <name>``."""
    name: str
    type: TypeRef

    def __str__(self) -> str:
        return f"{self.type} {self.name}"


@dataclass(frozen=True)
class StructType:
    """A named struct with its members in declaration order."""
    name: str
    members: Tuple[Member, ...]

    def references(self) -> Iterator[str]:
        """Yield the struct names referenced by members, arrays included."""
        for member in self.members:
            base = innermost(member.type)
            if isinstance(base, Custom):
                yield base.name


def _descriptor_fields(descriptor: Any) -> Tuple[Any, Any]:
    if isinstance(descriptor, Mapping):
        return descriptor.get("name"), descriptor.get("type")
    return getattr(descriptor, "name", None), getattr(descriptor, "type", None)


def build_struct_types(types: Mapping[str, Sequence[Any]]) -> Dict[str, StructType]:
    """
    Parse every struct definition of a type table.

    Member descriptors may be plain ``{"name": ..., "type": ...}`` mappings
    or objects exposing ``name`` / ``type`` attributes (``MemberType``).

    Raises:
        SchemaError: On atomic-name redefinition, invalid struct or member
            names, duplicate members or malformed type strings.
    """
    if not isinstance(types, Mapping):
        raise SchemaError(f"types must be a mapping, got {type(types).__name__}")

    struct_types: Dict[str, StructType] = {}
    for name, descriptors in types.items():
        if name in ATOMIC_TYPES:
            raise SchemaError(f"type {name} is already defined")
        if not is_identifier(name):
            raise SchemaError(f"invalid struct name {name!r}")
        if isinstance(descriptors, (str, bytes)) or not isinstance(descriptors, Sequence):
            raise SchemaError(f"members of {name} must be a list")

        members = []
        seen = set()
        for descriptor in descriptors:
            member_name, member_type = _descriptor_fields(descriptor)
            if not isinstance(member_name, str) or not isinstance(member_type, str):
                raise SchemaError(f"invalid member descriptor in {name}: {descriptor!r}")
            if member_name in seen:
                raise SchemaError(f"duplicate member {member_name} in {name}")
            seen.add(member_name)
            members.append(Member(member_name, parse_type(member_type)))

        struct_types[name] = StructType(name, tuple(members))
    return struct_types
