from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from tokenmerge.adapters.http_resilience import ResilientClient
from tokenmerge.adapters.probe import HttpxUrlProbe, default_probe_resilience
from tokenmerge.domain.ports.probing import ProbeFailedError, ProbeResponse


def _probe(transport: httpx.MockTransport) -> HttpxUrlProbe:
    return HttpxUrlProbe(ResilientClient(default_probe_resilience(), transport=transport))


def test_probe_reports_status_and_body() -> None:
    seen: list[tuple[str, str]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request.method, str(request.url)))
        if request.method == "HEAD":
            return httpx.Response(404)
        return httpx.Response(200, json={"profile": {"exists": True}})

    async def scenario() -> tuple[ProbeResponse, ProbeResponse]:
        async with _probe(httpx.MockTransport(handler)) as probe:
            head = await probe.head("https://example.com/logo.png")
            get = await probe.get("https://shadowban.eu/.api/solana")
        return head, get

    head, get = asyncio.run(scenario())

    assert head.status_code == 404
    assert get.status_code == 200
    assert json.loads(get.body) == {"profile": {"exists": True}}
    assert seen == [
        ("HEAD", "https://example.com/logo.png"),
        ("GET", "https://shadowban.eu/.api/solana"),
    ]


def test_probe_sends_user_agent() -> None:
    agents: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        agents.append(request.headers["User-Agent"])
        return httpx.Response(200)

    async def scenario() -> None:
        async with _probe(httpx.MockTransport(handler)) as probe:
            await probe.head("https://example.com")

    asyncio.run(scenario())

    assert agents == ["tokenmerge-verifier/0.1"]


def test_transport_errors_become_probe_failures() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async def scenario() -> None:
        async with _probe(httpx.MockTransport(handler)) as probe:
            await probe.head("https://unreachable.example.com")

    with pytest.raises(ProbeFailedError, match="connection refused"):
        asyncio.run(scenario())
