"""
Off-Chain Typed Data Signing

Caller-side signing helpers over the digest produced by the hasher. The
hasher never signs; these helpers take its ``SignableMessage`` and sign it
in-process with ``eth_account``. No RPC calls are made.

Exported helpers
----------------
sign_typed_data
    Hash a typed data document, sign the digest with a private key and
    return a ``SignedTypedData`` carrying the digest, signer and (v, r, s).

load_account
    Resolve a ``LocalAccount`` from an explicit key or ``EVM_PRIVATE_KEY``.
"""

import logging
from typing import Optional

from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_utils import keccak

from ..constants import PRIVATE_KEY_ENV, get_private_key_from_env
from ..engine.exceptions import ConfigurationError
from ..hashing.hasher import TypedDataLike, as_document
from .schemas import ECDSASignature, SignedTypedData

logger = logging.getLogger(__name__)


def load_account(private_key: Optional[str] = None) -> LocalAccount:
    """
    Build the signing account.

    Args:
        private_key: Hex-encoded secp256k1 private key (with or without
            ``0x`` prefix). Falls back to ``EVM_PRIVATE_KEY`` when omitted.

    Returns:
        ``LocalAccount`` for the key.

    Raises:
        ConfigurationError: If no key is configured or the key is malformed.
    """
    key = private_key or get_private_key_from_env()
    if not key:
        raise ConfigurationError(
            f"Private key not provided and {PRIVATE_KEY_ENV} is not set"
        )
    try:
        return Account.from_key(key)
    except Exception as exc:
        raise ConfigurationError(f"Invalid private key: {exc}") from exc


def sign_typed_data(
    document: TypedDataLike,
    *,
    private_key: Optional[str] = None,
) -> SignedTypedData:
    """
    Sign an EIP-712 typed data document.

    The digest is computed by the hasher; ``eth_account`` signs the
    resulting ``SignableMessage`` so the signature recovers against any
    ``eth_signTypedData_v4`` compatible verifier.

    Args:
        document: ``TypedDataDocument`` or its decoded mapping form.
        private_key: Signing key; defaults to ``EVM_PRIVATE_KEY``.

    Returns:
        ``SignedTypedData`` with ``digest``, ``signer`` and ``signature``.

    Raises:
        SchemaError / TypedValueError: If the document cannot be hashed.
        ConfigurationError: If no usable key is available.

    Example::

        signed = sign_typed_data(payload, private_key="0xYOUR_PRIVATE_KEY")
        signed.signature.to_packed_hex()  # 65-byte r || s || v
    """
    document = as_document(document)
    signable = document.signable_message()
    account = load_account(private_key)

    signed = account.sign_message(signable)
    digest = "0x" + keccak(
        b"\x19" + signable.version + signable.header + signable.body
    ).hex()
    logger.debug("Signed %s digest %s as %s", document.primary_type, digest, account.address)

    return SignedTypedData(
        digest=digest,
        signer=account.address,
        signature=ECDSASignature(
            v=signed.v,
            r="0x" + signed.r.to_bytes(32, "big").hex(),
            s="0x" + signed.s.to_bytes(32, "big").hex(),
        ),
    )
