"""
Signing Schema Models

Pydantic models describing the output of the signing collaborator.

    - ECDSASignature: v/r/s components over an EIP-712 digest.
    - SignedTypedData: digest, recovered signer and signature together.
"""

from pydantic import Field

from ..engine.exceptions import SignatureError
from ..schemas.bases import CanonicalModel


class ECDSASignature(CanonicalModel):
    """
    secp256k1 ECDSA signature (v, r, s).

    Attributes:
        v: ECDSA recovery ID (27 or 28).
        r: r component, 32 bytes as a 64-char hex string (0x prefix optional).
        s: s component, 32 bytes as a 64-char hex string (0x prefix optional).

    Example::

        sig = ECDSASignature(v=27, r="0x" + "a" * 64, s="0x" + "b" * 64)
        sig.to_packed_hex()
    """

    v: int = Field(..., ge=27, le=28, description="ECDSA recovery ID (27 or 28)")
    r: str = Field(..., description="Signature r component (32 bytes, 64-char hex, 0x prefix optional)")
    s: str = Field(..., description="Signature s component (32 bytes, 64-char hex, 0x prefix optional)")

    def validate_format(self) -> bool:
        """
        Validate v/r/s components.

        Returns:
            True when all components pass.

        Raises:
            SignatureError: Descriptive message on the first failed check.
        """
        if self.v not in (27, 28):
            raise SignatureError(f"Invalid recovery ID: {self.v}. Must be 27 or 28")

        for name, val in [("r", self.r), ("s", self.s)]:
            hex_str = val[2:] if val.startswith(("0x", "0X")) else val
            if len(hex_str) != 64:
                raise SignatureError(f"Invalid {name}: expected 64 hex chars, got {len(hex_str)}")
            try:
                int(hex_str, 16)
            except ValueError:
                raise SignatureError(f"Invalid {name}: not valid hexadecimal") from None

        return True

    def to_vrs(self) -> tuple:
        """``(v, r, s)`` as integers, the form ``eth_account`` recovers from."""
        self.validate_format()
        return self.v, int(self.r, 16), int(self.s, 16)

    def to_packed_hex(self) -> str:
        """
        Encode v/r/s into a packed 65-byte hex string (``r || s || v``).

        Returns:
            0x-prefixed 132-character hex string.

        Raises:
            SignatureError: If components do not pass ``validate_format()``.
        """
        _, r, s = self.to_vrs()
        return "0x" + format(r, "064x") + format(s, "064x") + format(self.v, "02x")


class SignedTypedData(CanonicalModel):
    """
    A typed data digest together with its signature.

    Attributes:
        digest: 0x-prefixed EIP-712 signing digest.
        signer: Checksum address of the signing key.
        signature: ECDSA components.
    """

    digest: str = Field(..., description="0x-prefixed 32-byte EIP-712 digest")
    signer: str = Field(..., description="Checksum address of the signer")
    signature: ECDSASignature = Field(..., description="ECDSA signature over the digest")
