import asyncio
import base64

import pytest
from nacl.signing import VerifyKey

from zcap_invoke.signer import Ed25519InvocationSigner, InvocationSigner, generate_keys


def test_generate_keys_lengths() -> None:
    keys = generate_keys()
    assert len(base64.b64decode(keys["public_key_base64"], validate=True)) == 32
    assert len(base64.b64decode(keys["private_key_base64"], validate=True)) == 64


def test_signer_from_private_key_signs_verifiably() -> None:
    keys = generate_keys()
    signer = Ed25519InvocationSigner.from_private_key_base64(
        id="did:key:z6MkTest#z6MkTest",
        private_key_base64=keys["private_key_base64"],
    )
    assert signer.public_key_base64 == keys["public_key_base64"]

    signature = asyncio.run(signer.sign(data=b"(key-id): did:key:z6MkTest#z6MkTest"))
    assert len(signature) == 64
    VerifyKey(base64.b64decode(keys["public_key_base64"])).verify(
        b"(key-id): did:key:z6MkTest#z6MkTest", signature
    )


def test_signer_accepts_bare_seed() -> None:
    keys = generate_keys()
    seed = base64.b64decode(keys["private_key_base64"])[:32]
    signer = Ed25519InvocationSigner.from_private_key_base64(
        id="did:key:z6MkSeed", private_key_base64=base64.b64encode(seed).decode()
    )
    assert signer.public_key_base64 == keys["public_key_base64"]


def test_signer_rejects_wrong_key_length() -> None:
    with pytest.raises(ValueError):
        Ed25519InvocationSigner.from_private_key_base64(
            id="did:key:z6MkBad", private_key_base64=base64.b64encode(b"short").decode()
        )


def test_signer_satisfies_protocol() -> None:
    assert isinstance(Ed25519InvocationSigner.generate(id="did:key:z6MkProto"), InvocationSigner)
