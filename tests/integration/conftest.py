# Copyright 2024-2026 The AIDD Authors
# SPDX-License-Identifier: Apache-2.0

"""
Fixtures for integration tests.

Provides FakePublication: an in-memory stand-in for what a domain owner has
published. Its HTTP side is served through ``httpx.MockTransport`` and its DNS
side through a TXT lookup function, so resolve() runs its real HTTP client
code, codec and validator end to end.
"""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from aidd.core.codec import TXT_PREFIX, encode, segment
from aidd.core.config import ResolveOptions, ResolverConfig
from aidd.core.transport import make_httpx_fetch


class FakePublication:
    """Well-known files and TXT records for any number of fake domains."""

    def __init__(self) -> None:
        self._files: dict[str, tuple[int, str]] = {}  # host -> (status, body)
        self._txt: dict[str, list[str]] = {}  # fqdn -> joined TXT values
        self.http_requests: list[httpx.Request] = []
        self.dns_queries: list[str] = []

    # ── Publishing ─────────────────────────────────────────────────────

    def publish_http(self, domain: str, record: Any, status: int = 200) -> None:
        body = record if isinstance(record, str) else json.dumps(record)
        self._files[domain] = (status, body)

    def publish_dns(self, domain: str, record: Any) -> None:
        # Zone publishers split the payload; resolvers see it joined again
        joined = "".join(segment(encode(record)))
        self._txt.setdefault(f"_ai.{domain}", []).append(TXT_PREFIX + joined)

    def publish_txt(self, domain: str, *values: str) -> None:
        self._txt.setdefault(f"_ai.{domain}", []).extend(values)

    # ── Capabilities ───────────────────────────────────────────────────

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.http_requests.append(request)
        if request.url.path != "/.well-known/domain-profile.json":
            return httpx.Response(404)
        status, body = self._files.get(request.url.host, (404, "Not Found"))
        return httpx.Response(status, text=body)

    async def fetch(self, url: str, *, headers: dict[str, str]) -> httpx.Response:
        async with httpx.AsyncClient(transport=httpx.MockTransport(self._handle)) as client:
            return await make_httpx_fetch(client)(url, headers=headers)

    async def lookup(self, name: str) -> list[str]:
        self.dns_queries.append(name)
        return list(self._txt.get(name, []))

    def options(self, **kwargs: Any) -> ResolveOptions:
        return ResolveOptions(
            fetch_impl=self.fetch,
            dns_lookup=self.lookup,
            config=ResolverConfig(dns_stagger_seconds=0),
            **kwargs,
        )


@pytest.fixture
def publication() -> FakePublication:
    return FakePublication()
