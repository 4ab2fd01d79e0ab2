"""
Typed Data Document Models

Pydantic models for the already-decoded EIP-712 input document:

    {
        "types":       {"<Struct>": [{"name": ..., "type": ...}, ...], ...},
        "primaryType": "<Struct>",
        "domain":      {...},
        "message":     {...}
    }

Unknown top-level keys and unknown member-descriptor keys are rejected.
``domain`` and ``message`` stay plain mappings: their values are only
interpreted against the declared types by the hasher.
"""

from typing import Any, Dict, List, Mapping, Optional

from eth_account.messages import SignableMessage
from pydantic import ConfigDict, Field, ValidationError

from ..constants import DOMAIN_FIELD_TYPES, EIP712_DOMAIN_TYPE
from ..engine.exceptions import SchemaError
from ..hashing.hasher import TypedDataHasher
from .bases import CanonicalModel


class MemberType(CanonicalModel):
    """
    One struct member declaration.

    Attributes:
        name: Member name (e.g. ``"wallet"``).
        type: Declared type string (e.g. ``"address"``, ``"Person[]"``).
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., description="Member name")
    type: str = Field(..., description="Declared EIP-712 type string")


class EIP712Domain(CanonicalModel):
    """
    EIP-712 domain separator values.

    Every field is optional; only the ones that are set take part in the
    domain type, in the canonical order
    ``name, version, chainId, verifyingContract, salt``.

    Example::

        domain = EIP712Domain(
            name="Ether Mail",
            version="1",
            chainId=1,
            verifyingContract="0xCcCCccccCCCCcCCCCCCcCcCccCcCCCcCcccccccC",
        )
        domain.to_types()
        # [{"name": "name", "type": "string"}, ..., {"name": "verifyingContract", "type": "address"}]
    """

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(default=None, description="Signing domain name")
    version: Optional[str] = Field(default=None, description="Signing domain version")
    chain_id: Optional[int] = Field(default=None, alias="chainId", ge=0, description="EIP-155 chain ID")
    verifying_contract: Optional[str] = Field(
        default=None, alias="verifyingContract", description="Contract that verifies signatures"
    )
    salt: Optional[str] = Field(default=None, description="bytes32 disambiguating salt (hex)")

    def to_dict(self) -> Dict[str, Any]:
        """Domain values keyed by wire name, unset fields omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_types(self) -> List[Dict[str, str]]:
        """``EIP712Domain`` member declarations for the fields that are set."""
        values = self.to_dict()
        return [
            {"name": name, "type": type_name}
            for name, type_name in DOMAIN_FIELD_TYPES.items()
            if name in values
        ]


class TypedDataDocument(CanonicalModel):
    """
    Decoded EIP-712 typed data document.

    Attributes:
        types: Struct name to ordered member declarations.
        primary_type: Name of the message struct (wire name ``primaryType``).
        domain: Values of the ``EIP712Domain`` struct.
        message: Values of the primary struct.

    Example::

        document = TypedDataDocument.from_dict(payload)
        document.hash_hex()
        # '0xbe609aee343fb3c4b28e1df9e632fca64fcfaede20f02e86244efddf30957bd2'
    """

    model_config = ConfigDict(extra="forbid")

    types: Dict[str, List[MemberType]] = Field(..., description="Type table")
    primary_type: str = Field(..., alias="primaryType", description="Primary struct name")
    domain: Dict[str, Any] = Field(..., description="EIP712Domain values")
    message: Dict[str, Any] = Field(..., description="Primary struct values")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TypedDataDocument":
        """
        Validate a decoded document.

        Raises:
            SchemaError: If the document shape is invalid (missing keys,
                unknown keys, malformed member declarations).
        """
        if not isinstance(data, Mapping):
            raise SchemaError(f"typed data must be a mapping, got {type(data).__name__}")
        try:
            return cls.model_validate(dict(data))
        except ValidationError as exc:
            raise SchemaError(f"invalid typed data document: {exc}") from exc

    @classmethod
    def build(
        cls,
        *,
        domain: EIP712Domain,
        primary_type: str,
        types: Mapping[str, List[Mapping[str, str]]],
        message: Mapping[str, Any],
    ) -> "TypedDataDocument":
        """
        Assemble a document from an ``EIP712Domain`` model.

        The ``EIP712Domain`` declaration is derived from the domain fields
        that are set; ``types`` must not declare it again.
        """
        if EIP712_DOMAIN_TYPE in types:
            raise SchemaError(f"{EIP712_DOMAIN_TYPE} is derived from the domain model")
        return cls.from_dict(
            {
                "types": {EIP712_DOMAIN_TYPE: domain.to_types(), **types},
                "primaryType": primary_type,
                "domain": domain.to_dict(),
                "message": dict(message),
            }
        )

    def hasher(self) -> TypedDataHasher:
        """Fresh hasher validated against this document's primary type."""
        return TypedDataHasher(self.types, primary_type=self.primary_type)

    def signable_message(self) -> SignableMessage:
        """``SignableMessage`` ready for ``eth_account`` signing."""
        return self.hasher().signable_message(self.primary_type, self.domain, self.message)

    def hash(self) -> bytes:
        """32-byte signing digest."""
        return self.hasher().hash(self.primary_type, self.domain, self.message)

    def hash_hex(self) -> str:
        """Signing digest as a ``0x``-prefixed hex string."""
        return "0x" + self.hash().hex()
