import base64
import hashlib
from typing import Any

from zcap_invoke.canonical import canonical_bytes

JSON_CONTENT_TYPE = "application/json"

# multihash code, digest length, header label
_ALGORITHMS: dict[str, tuple[int, int, str]] = {
    "sha256": (0x12, 32, "SHA-256"),
    "sha512": (0x13, 64, "SHA-512"),
}


def _algorithm(name: str) -> tuple[int, int, str]:
    key = name.lower().replace("-", "")
    if key not in _ALGORITHMS:
        raise ValueError(f"Unsupported digest algorithm: {name}")
    return _ALGORITHMS[key]


def multihash(data: bytes, *, algorithm: str = "sha256") -> bytes:
    code, length, _ = _algorithm(algorithm)
    digest = hashlib.new(algorithm.lower().replace("-", ""), data).digest()
    return bytes([code, length]) + digest


def create_digest_header(data: Any, *, algorithm: str = "sha256", use_multihash: bool = True) -> str:
    body = canonical_bytes(data)
    if use_multihash:
        # multibase prefix "u" is base64url without padding
        encoded = base64.urlsafe_b64encode(multihash(body, algorithm=algorithm))
        return f"mh=u{encoded.decode('ascii').rstrip('=')}"

    _, _, label = _algorithm(algorithm)
    digest = hashlib.new(algorithm.lower().replace("-", ""), body).digest()
    return f"{label}={base64.b64encode(digest).decode('ascii')}"


def attach_digest(headers: dict[str, str], json: Any, *, algorithm: str = "sha256") -> bool:
    """Add ``digest`` and ``content-type`` for a JSON body.

    A ``digest`` the caller already supplied is left alone. ``content-type`` is
    only defaulted when missing, whether or not the digest was pre-supplied.
    Returns True when a body is present.
    """
    if json is None:
        return False
    if "digest" not in headers:
        headers["digest"] = create_digest_header(json, algorithm=algorithm)
    if "content-type" not in headers:
        headers["content-type"] = JSON_CONTENT_TYPE
    return True
