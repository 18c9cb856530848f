import base64
import inspect
import logging
from time import perf_counter
from typing import Any

from zcap_invoke.capability import (
    CapabilityReference,
    DelegatedCapability,
    build_invocation_header,
    classify_capability,
    root_capability_id,
)
from zcap_invoke.config import settings
from zcap_invoke.digest import attach_digest
from zcap_invoke.errors import (
    InvalidCapabilityAction,
    InvalidInvocationSigner,
    InvalidMethod,
    InvalidURL,
    SigningFailure,
)
from zcap_invoke.headers import normalize_headers, parse_url
from zcap_invoke.signature import (
    build_authorization_header,
    build_signature_string,
    include_headers,
)
from zcap_invoke.signer import InvocationSigner
from zcap_invoke.timestamps import Timestamp, resolve_created, resolve_expires
from zcap_invoke.types import SignedHeaders

logger = logging.getLogger("zcap.invoke")


class _RootForURL:
    def __repr__(self) -> str:
        return "<root capability for url>"


ROOT_FOR_URL: Any = _RootForURL()


def _validate_method(method: Any) -> str:
    if not (method and isinstance(method, str)):
        raise InvalidMethod('"method" must be a string.')
    return method


def _validate_action(capability_action: Any) -> str:
    if not (capability_action and isinstance(capability_action, str)):
        raise InvalidCapabilityAction('"capability_action" must be a string.')
    return capability_action


def _validate_signer(invocation_signer: Any) -> InvocationSigner:
    if invocation_signer is None:
        raise InvalidInvocationSigner('"invocation_signer" must be an object.')
    signer_id = getattr(invocation_signer, "id", None)
    if not (signer_id and isinstance(signer_id, str)):
        raise InvalidInvocationSigner('"invocation_signer.id" must be a string.')
    if not callable(getattr(invocation_signer, "sign", None)):
        raise InvalidInvocationSigner('"invocation_signer.sign" must be a function.')
    return invocation_signer


def _resolve_capability(capability: Any, url: Any) -> CapabilityReference:
    if capability is ROOT_FOR_URL:
        capability = root_capability_id(url)
    return classify_capability(capability)


async def _sign(invocation_signer: InvocationSigner, data: bytes) -> bytes:
    result = invocation_signer.sign(data=data)
    if inspect.isawaitable(result):
        result = await result
    if not isinstance(result, (bytes, bytearray, memoryview)):
        raise TypeError(f"invocation signer returned {type(result).__name__}, expected bytes")
    return bytes(result)


async def sign_capability_invocation(
    *,
    url: Any,
    method: Any = None,
    headers: Any = None,
    json: Any = None,
    capability: Any = ROOT_FOR_URL,
    capability_action: Any = None,
    invocation_signer: Any = None,
    created: Timestamp | None = None,
    expires: Timestamp | None = None,
    emit_host_header: bool | None = None,
) -> SignedHeaders:
    """Sign an HTTP request that invokes a capability.

    ``url`` is the invocation target. ``capability`` is either a root zcap id,
    a capability document, or omitted to invoke the root zcap of ``url``. An
    explicit ``None`` is rejected. A JSON ``json`` body adds ``content-type``
    and ``digest`` to the signed headers; the caller must send
    ``canonicalize(json)`` as the body.

    All validation happens before the signer is called. Signer errors are
    raised as :class:`SigningFailure` with the original error as ``cause``.
    Returns a new dict of lower-cased headers ready to send.
    """
    method = _validate_method(method)
    capability_action = _validate_action(capability_action)
    invocation_signer = _validate_signer(invocation_signer)
    if not isinstance(url, str) or not url:
        raise InvalidURL(f'Invalid URL: "{url}"')
    parse_url(url)
    resolved = _resolve_capability(capability, url)

    signed = normalize_headers(headers, url=url)
    signed["capability-invocation"] = build_invocation_header(resolved, capability_action)
    has_body = attach_digest(signed, json, algorithm=settings.digest_algorithm)

    created_at = resolve_created(created)
    expires_at = resolve_expires(created_at, expires, window=settings.default_expires_seconds)

    key_id = invocation_signer.id
    names = include_headers(has_body)
    plaintext = build_signature_string(
        names,
        url=url,
        method=method,
        headers=signed,
        created=created_at,
        expires=expires_at,
        key_id=key_id,
    )

    start = perf_counter()
    try:
        signature = await _sign(invocation_signer, plaintext.encode("utf-8"))
    except Exception as exc:
        logger.warning(
            "capability_invocation_signing_failed",
            extra={
                "event_name": "capability_invocation_signing_failed",
                "key_id": key_id,
                "action": capability_action,
                "method": method,
                "url": url,
            },
            exc_info=True,
        )
        raise SigningFailure(url=url, method=method, action=capability_action, cause=exc) from exc
    latency_ms = (perf_counter() - start) * 1000

    signed["authorization"] = build_authorization_header(
        names,
        key_id=key_id,
        signature=base64.b64encode(signature).decode("ascii"),
        created=created_at,
        expires=expires_at,
    )

    logger.debug(
        "capability_invocation_signed",
        extra={
            "event_name": "capability_invocation_signed",
            "key_id": key_id,
            "action": capability_action,
            "method": method,
            "host": signed["host"],
            "delegated": isinstance(resolved, DelegatedCapability),
            "latency_ms": round(latency_ms, 2),
        },
    )

    if emit_host_header is None:
        emit_host_header = settings.emit_host_header
    if not emit_host_header:
        # The HTTP client sets host itself.
        del signed["host"]

    return signed
