"""
EIP-712 ``encodeData`` -- value to 32-byte word encoding.

> Each encoded member value is exactly 32-byte long.
>
> Boolean ``false`` and ``true`` are encoded as ``uint256`` values ``0`` and
> ``1``. Addresses are encoded as ``uint160``. Integer values are
> sign-extended to 256-bit and encoded in big endian order. ``bytes1`` to
> ``bytes31`` are zero-padded at the end to ``bytes32``.
>
> The dynamic values ``bytes`` and ``string`` are encoded as a ``keccak256``
> hash of their contents.
>
> Array values are encoded as the ``keccak256`` hash of the concatenated
> ``encodeData`` of their contents. Struct values are encoded recursively
> as ``hashStruct(value)``.

Values arrive already decoded (Python ``int``/``str``/``bytes``/``list``/
``dict``); they are interpreted against the declared ``TypeRef`` only, never
inspected for a type of their own.
"""

import re
from typing import Any, Callable, Mapping, Sequence

from eth_utils import decode_hex, keccak

from ..constants import ADDRESS_SIZE, WORD_SIZE
from ..engine.exceptions import EncodingError, TypedValueError
from .types import Array, Atomic, Custom, StructType, TypeRef

StructHasher = Callable[[str, Mapping[str, Any], str], bytes]

_DECIMAL_RE = re.compile(r"^-?[0-9]+$")
_HEX_INT_RE = re.compile(r"^(-?)0[xX]([0-9a-fA-F]+)$")
_HEX_BYTES_RE = re.compile(r"^(0x)?([0-9a-fA-F]{2})*$")
_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


def _kind(value: Any) -> str:
    return type(value).__name__


def to_int(value: Any, path: str = "") -> int:
    """
    Interpret a decoded number.

    Accepts native ``int`` (``bool`` as 0/1), decimal strings and
    ``0x``-prefixed hex strings, optionally negative (``"-0x7f"``).
    """
    if isinstance(value, int):
        return int(value)
    if isinstance(value, str):
        match = _HEX_INT_RE.match(value)
        if match:
            sign, digits = match.groups()
            number = int(digits, 16)
            return -number if sign else number
        if _DECIMAL_RE.match(value):
            try:
                return int(value, 10)
            except ValueError as exc:
                raise TypedValueError(f"invalid integer {value!r}", path) from exc
        raise TypedValueError(f"invalid integer {value!r}", path)
    raise TypedValueError(f"expected integer, got {_kind(value)}", path)


def to_bytes(value: Any, path: str = "") -> bytes:
    """Interpret a hex string (``0x`` optional) or a bytes-like value."""
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        if not _HEX_BYTES_RE.match(value):
            raise TypedValueError(f"invalid hex encoding {value!r}", path)
        return decode_hex(value)
    raise TypedValueError(f"expected hex bytes, got {_kind(value)}", path)


def to_address(value: Any, path: str = "") -> bytes:
    """Interpret an address as its 20 raw bytes."""
    if isinstance(value, str):
        if not _ADDRESS_RE.match(value):
            raise TypedValueError(f"invalid address {value!r}", path)
        return decode_hex(value)
    if isinstance(value, (bytes, bytearray)):
        if len(value) != ADDRESS_SIZE:
            raise TypedValueError(f"expected {ADDRESS_SIZE} address bytes, got {len(value)}", path)
        return bytes(value)
    if isinstance(value, int) and not isinstance(value, bool):
        if not 0 <= value < 2 ** (8 * ADDRESS_SIZE):
            raise TypedValueError(f"address {value} out of range", path)
        return value.to_bytes(ADDRESS_SIZE, "big")
    raise TypedValueError(f"expected address, got {_kind(value)}", path)


def _encode_integer(type_ref: Atomic, value: Any, path: str) -> bytes:
    number = to_int(value, path)
    bits = type_ref.bits
    if type_ref.is_signed:
        low, high = -(2 ** (bits - 1)), 2 ** (bits - 1)
    else:
        low, high = 0, 2 ** bits
    if not low <= number < high:
        raise TypedValueError(f"value {number} out of range for {type_ref}", path)
    return number.to_bytes(WORD_SIZE, "big", signed=type_ref.is_signed)


def _encode_atomic(type_ref: Atomic, value: Any, path: str) -> bytes:
    kind = type_ref.kind

    if kind == "bool":
        if isinstance(value, bool) or (isinstance(value, int) and value in (0, 1)):
            return int(value).to_bytes(WORD_SIZE, "big")
        raise TypedValueError(f"expected boolean, got {value!r}", path)

    if kind == "address":
        return to_address(value, path).rjust(WORD_SIZE, b"\x00")

    if type_ref.is_dynamic:
        if kind == "bytes":
            return keccak(to_bytes(value, path))
        if not isinstance(value, str):
            raise TypedValueError(f"expected string, got {_kind(value)}", path)
        try:
            return keccak(text=value)
        except UnicodeEncodeError as exc:
            raise TypedValueError(f"string is not valid UTF-8: {exc}", path) from exc

    if type_ref.size is not None:
        raw = to_bytes(value, path)
        if len(raw) != type_ref.size:
            raise TypedValueError(f"expected {type_ref.size} bytes for {kind}, got {len(raw)}", path)
        return raw.ljust(WORD_SIZE, b"\x00")

    if type_ref.bits is not None:
        return _encode_integer(type_ref, value, path)

    raise EncodingError(f"unhandled atomic type {kind}")


def _encode_array(type_ref: Array, value: Any, path: str, hash_struct: StructHasher) -> bytes:
    if isinstance(value, (str, bytes, bytearray)) or not isinstance(value, Sequence):
        raise TypedValueError(f"expected array for {type_ref}, got {_kind(value)}", path)
    if type_ref.length is not None and len(value) != type_ref.length:
        raise TypedValueError(
            f"expected {type_ref.length} elements for {type_ref}, got {len(value)}", path
        )
    words = b"".join(
        encode_field(type_ref.element, item, f"{path}[{index}]", hash_struct)
        for index, item in enumerate(value)
    )
    return keccak(words)


def encode_field(type_ref: TypeRef, value: Any, path: str, hash_struct: StructHasher) -> bytes:
    """
    Encode one value against its declared type into a single word.

    Args:
        type_ref: Declared type of the value.
        value: Decoded value.
        path: Dotted location of the value, used in error messages.
        hash_struct: Callback computing ``hashStruct`` for nested structs.

    Returns:
        Exactly 32 bytes.

    Raises:
        TypedValueError: If the value does not conform to ``type_ref``.
        EncodingError: If an internal invariant is violated.
    """
    if value is None:
        raise TypedValueError("missing value", path)

    if isinstance(type_ref, Atomic):
        word = _encode_atomic(type_ref, value, path)
    elif isinstance(type_ref, Array):
        word = _encode_array(type_ref, value, path, hash_struct)
    elif isinstance(type_ref, Custom):
        if not isinstance(value, Mapping):
            raise TypedValueError(f"expected struct {type_ref.name}, got {_kind(value)}", path)
        word = hash_struct(type_ref.name, value, path)
    else:
        raise EncodingError(f"unknown type reference {type_ref!r}")

    if len(word) != WORD_SIZE:
        raise EncodingError(f"{path}: encoded word is {len(word)} bytes")
    return word


def encode_data(
    struct_type: StructType,
    value: Mapping[str, Any],
    path: str,
    hash_struct: StructHasher,
) -> bytes:
    """
    Concatenate the member words of ``value`` in declaration order.

    Keys of ``value`` that the struct does not declare are ignored.

    Raises:
        TypedValueError: If a declared member is missing or invalid.
    """
    if not isinstance(value, Mapping):
        raise TypedValueError(f"expected struct {struct_type.name}, got {_kind(value)}", path)

    words = []
    for member in struct_type.members:
        member_path = f"{path}.{member.name}" if path else member.name
        if value.get(member.name) is None:
            raise TypedValueError(f"missing field {member.name!r} of {struct_type.name}", member_path)
        words.append(encode_field(member.type, value[member.name], member_path, hash_struct))
    return b"".join(words)
