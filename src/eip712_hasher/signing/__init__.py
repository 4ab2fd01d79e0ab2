from .schemas import ECDSASignature, SignedTypedData
from .signatures import load_account, sign_typed_data
from .verifies import recover_typed_data_signer, verify_typed_data_signature

__all__ = [
    "ECDSASignature",
    "SignedTypedData",
    "load_account",
    "sign_typed_data",
    "recover_typed_data_signer",
    "verify_typed_data_signature",
]
