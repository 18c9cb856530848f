import asyncio
import logging
from collections.abc import Mapping
from time import perf_counter
from typing import Any

import httpx

from zcap_invoke.canonical import canonical_bytes
from zcap_invoke.invocation import ROOT_FOR_URL, sign_capability_invocation
from zcap_invoke.signer import InvocationSigner

logger = logging.getLogger("zcap.http")


def _log_response(method: str, url: str, status: int, start: float) -> None:
    latency_ms = (perf_counter() - start) * 1000
    logger.info(
        "zcap_request",
        extra={
            "event_name": "zcap_request",
            "method": method,
            "url": url,
            "status": status,
            "latency_ms": round(latency_ms, 2),
        },
    )


class AsyncZcapClient:
    def __init__(
        self,
        *,
        invocation_signer: InvocationSigner,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
        emit_host_header: bool = True,
    ) -> None:
        self._invocation_signer = invocation_signer
        self._timeout = timeout
        self._transport = transport
        self._emit_host_header = emit_host_header

    async def request(
        self,
        method: str,
        url: str,
        *,
        capability_action: str,
        capability: Any = ROOT_FOR_URL,
        json: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        signed = await sign_capability_invocation(
            url=url,
            method=method,
            headers=dict(headers or {}),
            json=json,
            capability=capability,
            capability_action=capability_action,
            invocation_signer=self._invocation_signer,
            emit_host_header=self._emit_host_header,
        )
        # The digest covers the canonical serialization, so send exactly that.
        content = canonical_bytes(json) if json is not None else None

        start = perf_counter()
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            response = await client.request(method, url, headers=signed, content=content)
        _log_response(method, url, response.status_code, start)
        return response

    async def get(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("GET", url, **kwargs)

    async def post(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("POST", url, **kwargs)

    async def put(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("PUT", url, **kwargs)

    async def delete(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("DELETE", url, **kwargs)


class ZcapClient:
    def __init__(
        self,
        *,
        invocation_signer: InvocationSigner,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
        emit_host_header: bool = True,
    ) -> None:
        self._invocation_signer = invocation_signer
        self._timeout = timeout
        self._transport = transport
        self._emit_host_header = emit_host_header

    def request(
        self,
        method: str,
        url: str,
        *,
        capability_action: str,
        capability: Any = ROOT_FOR_URL,
        json: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        # Not usable from inside a running event loop; use AsyncZcapClient there.
        signed = asyncio.run(
            sign_capability_invocation(
                url=url,
                method=method,
                headers=dict(headers or {}),
                json=json,
                capability=capability,
                capability_action=capability_action,
                invocation_signer=self._invocation_signer,
                emit_host_header=self._emit_host_header,
            )
        )
        content = canonical_bytes(json) if json is not None else None

        start = perf_counter()
        with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
            response = client.request(method, url, headers=signed, content=content)
        _log_response(method, url, response.status_code, start)
        return response

    def get(self, url: str, **kwargs: Any) -> httpx.Response:
        return self.request("GET", url, **kwargs)

    def post(self, url: str, **kwargs: Any) -> httpx.Response:
        return self.request("POST", url, **kwargs)

    def put(self, url: str, **kwargs: Any) -> httpx.Response:
        return self.request("PUT", url, **kwargs)

    def delete(self, url: str, **kwargs: Any) -> httpx.Response:
        return self.request("DELETE", url, **kwargs)
