"""
Typed Data Signature Verification Helpers

Off-chain recovery of the signer of an EIP-712 digest. The struct hash is
rebuilt from the document, the signer is recovered from (v, r, s) with
``eth_account`` and compared with the expected address.
"""

from typing import Tuple, Union

from eth_account import Account
from pydantic import ValidationError

from ..engine.exceptions import SignatureError
from ..hashing.hasher import TypedDataLike, as_document
from .schemas import ECDSASignature


def _to_vrs(v: int, r: Union[int, str], s: Union[int, str]) -> Tuple[int, int, int]:
    if isinstance(r, int):
        r = "0x" + format(r, "064x")
    if isinstance(s, int):
        s = "0x" + format(s, "064x")
    try:
        signature = ECDSASignature(v=v, r=r, s=s)
    except ValidationError as exc:
        raise SignatureError(f"Invalid signature components: {exc}") from exc
    return signature.to_vrs()


def recover_typed_data_signer(
    document: TypedDataLike,
    *,
    v: int,
    r: Union[int, str],
    s: Union[int, str],
) -> str:
    """
    Recover the checksum address that signed ``document``.

    Args:
        document: ``TypedDataDocument`` or its decoded mapping form.
        v: ECDSA recovery ID (27/28).
        r: Signature ``r`` component (int or 0x-prefixed hex).
        s: Signature ``s`` component (int or 0x-prefixed hex).

    Raises:
        SchemaError / TypedValueError: If the document cannot be hashed.
        SignatureError: If the components are malformed.
    """
    vrs = _to_vrs(v, r, s)
    signable = as_document(document).signable_message()
    return Account.recover_message(signable, vrs=vrs)


def verify_typed_data_signature(
    document: TypedDataLike,
    *,
    v: int,
    r: Union[int, str],
    s: Union[int, str],
    signer: str,
) -> bool:
    """
    Check that ``signer`` produced (v, r, s) over ``document``.

    Document errors propagate; any failure to recover a signer from the
    signature itself is reported as ``False``.

    Returns:
        ``True`` if the recovered address equals ``signer`` (case-insensitive).
    """
    signable = as_document(document).signable_message()

    # ---- EOA: ECDSA recovery ----
    try:
        recovered = Account.recover_message(signable, vrs=_to_vrs(v, r, s))
    except Exception:
        return False
    return recovered.lower() == signer.lower()
