"""
Shared fixtures for the typed data test suite.

Provides the canonical ``Mail`` document from the EIP-712 reference example
and the deterministic mock signing key used throughout the signing tests.
"""

import copy

import pytest
from eth_account import Account


MOCK_PRIVATE_KEY = "0x1234567890123456789012345678901234567890123456789012345678901234"
MOCK_SIGNER_ADDRESS = Account.from_key(MOCK_PRIVATE_KEY).address

MOCK_VERIFYING_CONTRACT = "0xCcCCccccCCCCcCCCCCCcCcCccCcCCCcCcccccccC"

EIP712_DOMAIN_MEMBERS = [
    {"name": "name", "type": "string"},
    {"name": "version", "type": "string"},
    {"name": "chainId", "type": "uint256"},
    {"name": "verifyingContract", "type": "address"},
]

MAIL_DOCUMENT = {
    "types": {
        "EIP712Domain": EIP712_DOMAIN_MEMBERS,
        "Person": [
            {"name": "name", "type": "string"},
            {"name": "wallet", "type": "address"},
        ],
        "Mail": [
            {"name": "from", "type": "Person"},
            {"name": "to", "type": "Person"},
            {"name": "contents", "type": "string"},
        ],
    },
    "primaryType": "Mail",
    "domain": {
        "name": "Ether Mail",
        "version": "1",
        "chainId": 1,
        "verifyingContract": MOCK_VERIFYING_CONTRACT,
    },
    "message": {
        "from": {"name": "Cow", "wallet": "0xCD2a3d9F938E13CD947Ec05AbC7FE734Df8DD826"},
        "to": {"name": "Bob", "wallet": "0xbBbBBBBbbBBBbbbBbbBbbbbBBbBbbbbBbBbbBBbB"},
        "contents": "Hello, Bob!",
    },
}

MAIL_DIGEST = "0xbe609aee343fb3c4b28e1df9e632fca64fcfaede20f02e86244efddf30957bd2"


@pytest.fixture
def mail_document():
    """Fresh deep copy of the ``Mail`` document, safe to mutate."""
    return copy.deepcopy(MAIL_DOCUMENT)


@pytest.fixture
def mail_digest():
    """Reference signing digest of ``MAIL_DOCUMENT``."""
    return MAIL_DIGEST


@pytest.fixture
def private_key():
    """Deterministic secp256k1 key for signing tests."""
    return MOCK_PRIVATE_KEY


@pytest.fixture
def signer_address():
    """Checksum address of ``MOCK_PRIVATE_KEY``."""
    return MOCK_SIGNER_ADDRESS

