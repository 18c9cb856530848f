import base64
import binascii
import gzip
import json
import zlib
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

from zcap_invoke.canonical import canonical_bytes
from zcap_invoke.errors import InvalidCapability
from zcap_invoke.types import CapabilityDocument

ZCAP_ROOT_PREFIX = "urn:zcap:root:"

# Characters left unescaped by JavaScript's encodeURIComponent.
_URI_COMPONENT_SAFE = "-_.!~*'()"


@dataclass(frozen=True)
class RootCapability:
    id: str


@dataclass(frozen=True)
class DelegatedCapability:
    document: Mapping[str, Any]

    @property
    def id(self) -> str:
        return str(self.document["id"])


CapabilityReference = RootCapability | DelegatedCapability


def root_capability_id(url: str) -> str:
    return f"{ZCAP_ROOT_PREFIX}{quote(str(url), safe=_URI_COMPONENT_SAFE)}"


def classify_capability(value: Any) -> CapabilityReference:
    """Resolve a caller-supplied capability into a root or delegated reference.

    A string is always a root capability id. A mapping is only embedded when it
    names a ``parentCapability``; otherwise it is reduced to its ``id``.
    """
    if isinstance(value, (RootCapability, DelegatedCapability)):
        return value
    if isinstance(value, str) and value:
        return RootCapability(value)
    if isinstance(value, Mapping):
        capability_id = value.get("id")
        if isinstance(capability_id, str) and capability_id:
            if value.get("parentCapability"):
                return DelegatedCapability(dict(value))
            return RootCapability(capability_id)
    raise InvalidCapability(
        '"capability" must be a string to invoke a root capability or an '
        "object to invoke a delegated capability."
    )


def encode_capability(document: Mapping[str, Any]) -> str:
    # mtime is pinned so the same capability always encodes to the same header.
    compressed = gzip.compress(canonical_bytes(dict(document)), mtime=0)
    return base64.urlsafe_b64encode(compressed).decode("ascii").rstrip("=")


def decode_capability(encoded: str) -> CapabilityDocument:
    padding = "=" * ((4 - len(encoded) % 4) % 4)
    try:
        compressed = base64.urlsafe_b64decode(encoded + padding)
        document = json.loads(gzip.decompress(compressed).decode("utf-8"))
    except (binascii.Error, zlib.error, OSError, EOFError, ValueError) as exc:
        raise InvalidCapability("Invalid encoded capability", cause=exc) from exc

    if not isinstance(document, dict):
        raise InvalidCapability("Encoded capability is not an object")
    return document


def build_invocation_header(capability: CapabilityReference, action: str | None = None) -> str:
    if isinstance(capability, DelegatedCapability):
        # Delegated zcaps travel with the request; the verifier cannot fetch them.
        header = f'zcap capability="{encode_capability(capability.document)}"'
    else:
        header = f'zcap id="{capability.id}"'
    if action:
        header += f',action="{action}"'
    return header
