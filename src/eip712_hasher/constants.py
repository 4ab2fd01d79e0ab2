"""
EIP-712 Constants and Environment Configuration

Protocol constants shared by the hashing pipeline and environment-aware
helpers used by the signing collaborator. ``.env`` files are loaded once at
import so that ``EVM_PRIVATE_KEY`` can be provided without exporting it.
"""

import os
from typing import Dict, Optional

import dotenv

dotenv.load_dotenv()

#: Conventional struct name of the signing domain.
EIP712_DOMAIN_TYPE: str = "EIP712Domain"

#: EIP-191 version byte ``0x01`` preceded by the ``0x19`` marker.
EIP191_STRUCTURED_DATA_PREFIX: bytes = b"\x19\x01"

#: EIP-191 version byte used for structured data.
STRUCTURED_DATA_VERSION: bytes = b"\x01"

#: Every encoded member occupies exactly one word.
WORD_SIZE: int = 32

#: Address width in bytes.
ADDRESS_SIZE: int = 20

#: Canonical order and types of the optional EIP712Domain fields.
DOMAIN_FIELD_TYPES: Dict[str, str] = {
    "name": "string",
    "version": "string",
    "chainId": "uint256",
    "verifyingContract": "address",
    "salt": "bytes32",
}

#: Environment variable holding the default signing key.
PRIVATE_KEY_ENV: str = "EVM_PRIVATE_KEY"


def get_private_key_from_env() -> Optional[str]:
    """
    Load the default signing key from environment variables.

    Environment Variable:
        - EVM_PRIVATE_KEY: secp256k1 private key (0x-prefixed hex format)

    Returns:
        str: Private key from environment, or None if not configured

    Note:
        The private key should be stored securely in environment variables
        and never committed to version control.

    Example:
        # In your .env file or environment setup:
        # export EVM_PRIVATE_KEY="0x1234567890abcdef..."

        pk = get_private_key_from_env()
        if pk:
            signed = sign_typed_data(document, private_key=pk)
    """
    value = os.getenv(PRIVATE_KEY_ENV)
    return value or None
