import base64
from collections.abc import Awaitable
from typing import Protocol, runtime_checkable

from nacl.signing import SigningKey

from zcap_invoke.types import GeneratedKeys


@runtime_checkable
class InvocationSigner(Protocol):
    id: str

    def sign(self, *, data: bytes) -> bytes | Awaitable[bytes]: ...


def _b64_decode(value: str) -> bytes:
    try:
        return base64.b64decode(value, validate=True)
    except ValueError as exc:
        raise ValueError("Invalid base64 input") from exc


def _b64_encode(value: bytes) -> str:
    return base64.b64encode(value).decode("ascii")


def generate_keys() -> GeneratedKeys:
    signing_key = SigningKey.generate()
    seed32 = bytes(signing_key)
    public32 = bytes(signing_key.verify_key)
    return {
        "public_key_base64": _b64_encode(public32),
        "private_key_base64": _b64_encode(seed32 + public32),
    }


class Ed25519InvocationSigner:
    """Signs invocations with an Ed25519 key held in memory.

    ``id`` is the verification method a verifier will dereference, usually a
    DID URL such as ``did:key:z6Mk...#z6Mk...``.
    """

    algorithm = "Ed25519"

    def __init__(self, *, id: str, signing_key: SigningKey) -> None:
        self.id = id
        self._signing_key = signing_key

    @classmethod
    def generate(cls, *, id: str) -> "Ed25519InvocationSigner":
        return cls(id=id, signing_key=SigningKey.generate())

    @classmethod
    def from_private_key_base64(cls, *, id: str, private_key_base64: str) -> "Ed25519InvocationSigner":
        private_key = _b64_decode(private_key_base64)
        if len(private_key) not in (32, 64):
            raise ValueError("private_key_base64 must decode to 32 or 64 bytes")
        return cls(id=id, signing_key=SigningKey(private_key[:32]))

    @property
    def public_key_base64(self) -> str:
        return _b64_encode(bytes(self._signing_key.verify_key))

    async def sign(self, *, data: bytes) -> bytes:
        return self._signing_key.sign(data).signature
