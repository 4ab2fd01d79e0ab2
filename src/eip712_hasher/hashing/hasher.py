"""
EIP-712 Typed Data Hasher

Ties the type parser, dependency resolver, ``encodeType`` renderer and
value encoder together:

    hashStruct(s)    = keccak256(typeHash ‖ encodeData(s))
    domainSeparator  = hashStruct(eip712Domain)
    digest           = keccak256("\\x19\\x01" ‖ domainSeparator ‖ hashStruct(message))

A ``TypedDataHasher`` is bound to one type table. Construction validates
every struct definition and type hashes are memoised on the instance only,
so separate documents never share state. The cache is lock-guarded and may
be shared by threads hashing values against the same table.
"""

import logging
import threading
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from eth_account.messages import SignableMessage
from eth_utils import keccak

from ..constants import (
    EIP191_STRUCTURED_DATA_PREFIX,
    EIP712_DOMAIN_TYPE,
    STRUCTURED_DATA_VERSION,
)
from ..engine.exceptions import SchemaError, TypedValueError
from .encode_data import encode_data
from .encode_type import encode_type, hash_type
from .resolver import find_dependencies
from .types import StructType, build_struct_types

logger = logging.getLogger(__name__)


class TypedDataHasher:
    """
    Stateless-by-contract EIP-712 hasher over a single type table.

    Args:
        types: Mapping of struct name to ordered member descriptors
            (``{"name": ..., "type": ...}`` mappings or ``MemberType``).
        primary_type: Optional primary struct; when given, it is resolved
            eagerly so unknown or cyclic references fail before any value
            is touched.

    Raises:
        SchemaError: If the table is malformed, lacks ``EIP712Domain``, or
            the domain / primary type cannot be resolved.

    Example::

        hasher = TypedDataHasher(types, primary_type="Mail")
        digest = hasher.hash("Mail", domain, message)
    """

    def __init__(
        self,
        types: Mapping[str, Sequence[Any]],
        primary_type: Optional[str] = None,
    ):
        self.struct_types: Dict[str, StructType] = build_struct_types(types)
        if EIP712_DOMAIN_TYPE not in self.struct_types:
            raise SchemaError(f"missing struct type {EIP712_DOMAIN_TYPE}")

        self._type_hashes: Dict[str, bytes] = {}
        self._lock = threading.Lock()

        self.dependencies(EIP712_DOMAIN_TYPE)
        if primary_type is not None:
            self.dependencies(primary_type)
        logger.debug("Loaded %d struct types", len(self.struct_types))

    def dependencies(self, primary_type: str) -> List[str]:
        """Sorted struct names reachable from ``primary_type``."""
        return find_dependencies(primary_type, self.struct_types)

    def encode_type(self, primary_type: str) -> str:
        """Canonical ``encodeType`` string of ``primary_type``."""
        return encode_type(primary_type, self.struct_types)

    def type_hash(self, primary_type: str) -> bytes:
        """``keccak256(encodeType(primary_type))``, memoised per instance."""
        with self._lock:
            cached = self._type_hashes.get(primary_type)
        if cached is not None:
            return cached

        type_hash = hash_type(primary_type, self.struct_types)
        with self._lock:
            self._type_hashes.setdefault(primary_type, type_hash)
        logger.debug("Computed type hash for %s: 0x%s", primary_type, type_hash.hex())
        return type_hash

    def encode_data(self, primary_type: str, value: Mapping[str, Any], path: str = "") -> bytes:
        """Concatenated member words of ``value`` (without the type hash)."""
        return encode_data(self._struct(primary_type), value, path, self._hash_struct)

    def hash_struct(self, primary_type: str, value: Mapping[str, Any]) -> bytes:
        """``keccak256(typeHash(primary_type) ‖ encodeData(value))``."""
        return self._hash_struct(primary_type, value, primary_type)

    def domain_separator(self, domain: Mapping[str, Any]) -> bytes:
        """``hashStruct`` of ``domain`` against the declared ``EIP712Domain``."""
        return self._hash_struct(EIP712_DOMAIN_TYPE, domain, "domain")

    def signable_message(
        self,
        primary_type: str,
        domain: Mapping[str, Any],
        message: Mapping[str, Any],
    ) -> SignableMessage:
        """
        EIP-191 version ``0x01`` envelope accepted by ``eth_account``.

        ``header`` is the domain separator and ``body`` the message struct
        hash, so ``Account.sign_message`` signs exactly :meth:`hash`.
        """
        self.dependencies(primary_type)
        return SignableMessage(
            STRUCTURED_DATA_VERSION,
            self.domain_separator(domain),
            self._hash_struct(primary_type, message, "message"),
        )

    def hash(
        self,
        primary_type: str,
        domain: Mapping[str, Any],
        message: Mapping[str, Any],
    ) -> bytes:
        """Final 32-byte signing digest."""
        signable = self.signable_message(primary_type, domain, message)
        digest = keccak(EIP191_STRUCTURED_DATA_PREFIX + signable.header + signable.body)
        logger.debug("Computed %s digest 0x%s", primary_type, digest.hex())
        return digest

    def _struct(self, name: str) -> StructType:
        try:
            return self.struct_types[name]
        except KeyError:
            raise SchemaError(f"unknown type {name}") from None

    def _hash_struct(self, name: str, value: Mapping[str, Any], path: str) -> bytes:
        struct_type = self._struct(name)
        if not isinstance(value, Mapping):
            raise TypedValueError(f"expected struct {name}, got {type(value).__name__}", path)
        return keccak(
            self.type_hash(name)
            + encode_data(struct_type, value, path, self._hash_struct)
        )


TypedDataLike = Union["TypedDataDocument", Mapping[str, Any]]


def as_document(document: TypedDataLike) -> "TypedDataDocument":
    from ..schemas.typed_data import TypedDataDocument

    if isinstance(document, TypedDataDocument):
        return document
    return TypedDataDocument.from_dict(document)


def encode_typed_data(document: TypedDataLike) -> SignableMessage:
    """
    Build the ``SignableMessage`` of a typed data document.

    Accepts a ``TypedDataDocument`` or its decoded mapping form
    (``{"types", "primaryType", "domain", "message"}``).
    """
    document = as_document(document)
    hasher = document.hasher()
    return hasher.signable_message(document.primary_type, document.domain, document.message)


def hash_typed_data(document: TypedDataLike) -> bytes:
    """Signing digest of a typed data document."""
    document = as_document(document)
    hasher = document.hasher()
    return hasher.hash(document.primary_type, document.domain, document.message)
