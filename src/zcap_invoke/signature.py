import re
from collections.abc import Mapping, Sequence
from typing import Any

from zcap_invoke.headers import request_target

SIGNATURE_ALGORITHM = "hs2019"

INCLUDE_HEADERS: tuple[str, ...] = (
    "(key-id)",
    "(created)",
    "(expires)",
    "(request-target)",
    "host",
    "capability-invocation",
)
BODY_HEADERS: tuple[str, ...] = ("content-type", "digest")

_PARAM_RE = re.compile(r'([A-Za-z][A-Za-z0-9-]*)=(?:"([^"]*)"|([^,\s]*))')


def include_headers(has_body: bool) -> list[str]:
    names = list(INCLUDE_HEADERS)
    if has_body:
        names.extend(BODY_HEADERS)
    return names


def build_signature_string(
    include_headers: Sequence[str],
    *,
    url: Any,
    method: str,
    headers: Mapping[str, str],
    created: int,
    expires: int,
    key_id: str,
) -> str:
    lines: list[str] = []
    for name in include_headers:
        if name == "(key-id)":
            value = key_id
        elif name == "(created)":
            value = str(created)
        elif name == "(expires)":
            value = str(expires)
        elif name == "(request-target)":
            value = request_target(method, url)
        else:
            if name not in headers:
                raise KeyError(f'Header "{name}" is listed for signing but was not set.')
            value = headers[name].strip()
        lines.append(f"{name}: {value}")
    return "\n".join(lines)


def build_authorization_header(
    include_headers: Sequence[str],
    *,
    key_id: str,
    signature: str,
    created: int,
    expires: int,
) -> str:
    return (
        f'Signature keyId="{key_id}"'
        f',algorithm="{SIGNATURE_ALGORITHM}"'
        f",created={created}"
        f",expires={expires}"
        f',headers="{" ".join(include_headers)}"'
        f',signature="{signature}"'
    )


def parse_authorization_header(value: str) -> dict[str, str]:
    scheme, _, params = value.strip().partition(" ")
    if scheme != "Signature":
        raise ValueError("Authorization header does not use the Signature scheme")
    return {
        match.group(1): match.group(2) if match.group(2) is not None else match.group(3)
        for match in _PARAM_RE.finditer(params)
    }
