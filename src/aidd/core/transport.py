# Copyright 2024-2026 The AIDD Authors
# SPDX-License-Identifier: Apache-2.0

"""
Pluggable network capabilities used by the channel fetchers.

Two narrow interfaces are defined:

* ``HttpFetch``: ``await fetch(url, headers=...) -> httpx.Response``
* ``TxtLookup``: ``await lookup(name) -> list[str]``

The defaults use httpx and dnspython. Callers substitute their own
implementations through ``ResolveOptions`` for testing or alternate
resolvers.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import Protocol, TypeVar

import dns.asyncresolver
import dns.resolver
import httpx
import structlog

logger = structlog.get_logger(__name__)

T = TypeVar("T")

DEFAULT_HTTP_TIMEOUT = 10.0


class HttpFetch(Protocol):
    """Performs a GET request and returns the fully read response."""

    async def __call__(self, url: str, *, headers: dict[str, str]) -> httpx.Response: ...


class TxtLookup(Protocol):
    """Returns one string per TXT record, character-strings already joined."""

    async def __call__(self, name: str) -> list[str]: ...


class FetchAbortedError(Exception):
    """Raised when an external cancellation signal fires before a fetch completes."""


def make_httpx_fetch(client: httpx.AsyncClient) -> HttpFetch:
    """Adapt an existing AsyncClient (e.g. one using httpx.MockTransport)."""

    async def fetch(url: str, *, headers: dict[str, str]) -> httpx.Response:
        return await client.get(url, headers=headers)

    return fetch


async def httpx_fetch(url: str, *, headers: dict[str, str]) -> httpx.Response:
    """Default HTTP capability: a short-lived AsyncClient per request."""
    async with httpx.AsyncClient(
        timeout=DEFAULT_HTTP_TIMEOUT,
        follow_redirects=True,
        max_redirects=3,
    ) as client:
        return await client.get(url, headers=headers)


async def dnspython_txt_lookup(name: str) -> list[str]:
    """
    Default TXT capability using the system resolver.

    Each record's character-strings are concatenated in order. A name that
    does not exist or has no TXT data yields an empty list; other resolver
    failures propagate so the caller can report them.
    """
    resolver = dns.asyncresolver.Resolver()
    try:
        answers = await resolver.resolve(name, "TXT")
    except (dns.resolver.NXDOMAIN, dns.resolver.NoAnswer):
        logger.debug("No TXT record", fqdn=name)
        return []

    values = []
    for rdata in answers:
        # Unrelated sibling records may hold non-UTF-8 bytes
        values.append(b"".join(rdata.strings).decode("utf-8", errors="replace"))
    return values


async def bounded(
    awaitable: Awaitable[T],
    *,
    timeout: float | None = None,
    signal: asyncio.Event | None = None,
    timeout_message: str = "Operation timed out",
    abort_message: str = "Operation aborted",
) -> T:
    """
    Await ``awaitable`` racing an optional timeout and cancellation signal.

    Raises:
        TimeoutError: If ``timeout`` elapses first.
        FetchAbortedError: If ``signal`` is set first.

    A timeout of zero or less disables the deadline.

    Helper tasks are cancelled and drained on every exit path.
    """
    if timeout is not None and timeout <= 0:
        timeout = None

    if timeout is None and signal is None:
        return await awaitable

    if signal is not None and signal.is_set():
        if asyncio.iscoroutine(awaitable):
            awaitable.close()
        raise FetchAbortedError(abort_message)

    task = asyncio.ensure_future(awaitable)
    waiters: set[asyncio.Future] = {task}
    abort_waiter = None
    if signal is not None:
        abort_waiter = asyncio.ensure_future(signal.wait())
        waiters.add(abort_waiter)

    try:
        done, _ = await asyncio.wait(
            waiters, timeout=timeout, return_when=asyncio.FIRST_COMPLETED
        )
        if task in done:
            return task.result()
        if abort_waiter is not None and abort_waiter in done:
            raise FetchAbortedError(abort_message)
        raise TimeoutError(timeout_message)
    finally:
        pending = [w for w in waiters if not w.done()]
        for waiter in pending:
            waiter.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
