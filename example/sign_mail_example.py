from eip712_hasher import (
    EIP712Domain,
    TypedDataDocument,
    sign_typed_data,
    verify_typed_data_signature,
)

pk = "0xxxx"  # Replace with actual key, or set EVM_PRIVATE_KEY in .env

document = TypedDataDocument.build(
    domain=EIP712Domain(
        name="Ether Mail",
        version="1",
        chainId=1,
        verifyingContract="0xCcCCccccCCCCcCCCCCCcCcCccCcCCCcCcccccccC",
    ),
    primary_type="Mail",
    types={
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
    message={
        "from": {"name": "Cow", "wallet": "0xCD2a3d9F938E13CD947Ec05AbC7FE734Df8DD826"},
        "to": {"name": "Bob", "wallet": "0xbBbBBBBbbBBBbbbBbbBbbbbBBbBbbbbBbBbbBBbB"},
        "contents": "Hello, Bob!",
    },
)


if __name__ == "__main__":
    print("Digest:", document.hash_hex())

    signed = sign_typed_data(document, private_key=pk)
    sig = signed.signature
    print("Signer:", signed.signer)
    print("Signature:", sig.to_packed_hex())
    print("Valid:", verify_typed_data_signature(document, v=sig.v, r=sig.r, s=sig.s, signer=signed.signer))
