from collections.abc import Mapping
from typing import Any

import httpx

from zcap_invoke.errors import InvalidHeaders, InvalidURL


def parse_url(url: Any) -> httpx.URL:
    if not isinstance(url, (str, httpx.URL)):
        raise InvalidURL(f'Invalid URL: "{url}"')
    try:
        return httpx.URL(url)
    except httpx.InvalidURL as exc:
        raise InvalidURL(f'Invalid URL: "{url}"', cause=exc) from exc


def url_host(url: Any) -> str:
    parsed = parse_url(url)
    if not parsed.is_absolute_url or not parsed.host:
        raise InvalidURL(f'Invalid URL: "{url}"')
    return parsed.netloc.decode("ascii")


def request_target(method: str, url: Any) -> str:
    path = parse_url(url).raw_path.decode("ascii") or "/"
    return f"{method.lower()} {path}"


def normalize_headers(headers: Any, *, url: Any) -> dict[str, str]:
    if not isinstance(headers, Mapping):
        raise InvalidHeaders('"headers" must be a mapping of header names to values.')

    normalized: dict[str, str] = {}
    for name, value in headers.items():
        if not isinstance(name, str) or not name:
            raise InvalidHeaders(f"Invalid header name: {name!r}")
        key = name.lower()
        if key in normalized:
            raise InvalidHeaders(f'Duplicate header "{key}" (header names are case-insensitive).')
        normalized[key] = str(value)

    if "host" not in normalized:
        normalized["host"] = url_host(url)
    return normalized
