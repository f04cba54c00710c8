# Copyright 2024-2026 The AIDD Authors
# SPDX-License-Identifier: Apache-2.0

"""
AIDD Resolver: reconcile the HTTPS and DNS publications of a domain profile.

Both channels are probed concurrently. The HTTPS well-known file is
authoritative; the DNS TXT record is a fallback. When neither channel yields a
valid record, a found-but-invalid record is still surfaced so callers can see
what is broken.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Iterable
from typing import Literal

import structlog

from aidd.core.config import ResolveOptions
from aidd.core.dns_fetcher import fetch_dns
from aidd.core.http_fetcher import fetch_http
from aidd.core.models import EmptyDomainError, ResolveDetails, ResolveResult, SourceState

logger = structlog.get_logger(__name__)

SourceKey = Literal["http", "dns"]


def normalize_domain(domain: str) -> str:
    """
    Trim, lowercase and drop a trailing dot.

    Raises:
        EmptyDomainError: If nothing is left.
    """
    normalized = domain.strip().lower().rstrip(".")
    if not normalized:
        raise EmptyDomainError("Domain cannot be empty.")
    return normalized


def _select(
    sources: list[tuple[SourceKey, SourceState]],
) -> tuple[SourceKey | Literal["none"], SourceState | None]:
    """Pick the first valid source in priority order, else the first found one."""
    for key, state in sources:
        if state.found and state.payload is not None:
            return key, state

    for key, state in sources:
        if state.found:
            return key, state

    return "none", None


async def resolve(domain: str, options: ResolveOptions | None = None) -> ResolveResult:
    """
    Resolve AI Domain Data for a domain.

    Fetches ``https://{domain}/.well-known/domain-profile.json`` and the TXT
    record at ``_ai.{domain}`` concurrently, then chooses HTTP over DNS.

    Args:
        domain: Domain to resolve (e.g., "example.com").
        options: Capabilities, cancellation signal, timeout and config.

    Returns:
        ResolveResult with the chosen payload and both channel states.

    Raises:
        EmptyDomainError: If domain is blank. Raised before any network call.

    Example:
        >>> result = await resolve("example.com")
        >>> if result.valid:
        ...     print(result.source, result.payload["name"])
    """
    normalized = normalize_domain(domain)
    options = options or ResolveOptions()

    start_time = time.perf_counter()
    logger.info("Resolving AI domain data", domain=normalized)

    async def _staggered_dns() -> SourceState:
        # Spread DNS load when many domains are resolved in a batch
        await asyncio.sleep(options.config.dns_stagger_seconds)
        return await fetch_dns(normalized, options)

    http_state, dns_state = await asyncio.gather(
        fetch_http(normalized, options),
        _staggered_dns(),
    )

    source, chosen = _select([("http", http_state), ("dns", dns_state)])

    elapsed_ms = (time.perf_counter() - start_time) * 1000

    result = ResolveResult(
        domain=normalized,
        source=source,
        valid=bool(chosen is not None and chosen.payload is not None and not chosen.errors),
        payload=chosen.payload if chosen is not None else None,
        errors=list(chosen.errors) if chosen is not None and chosen.errors else None,
        details=ResolveDetails(http=http_state, dns=dns_state),
        query_time_ms=elapsed_ms,
    )

    logger.info(
        "Resolution complete",
        domain=normalized,
        source=result.source,
        valid=result.valid,
        http_found=http_state.found,
        dns_found=dns_state.found,
        time_ms=f"{elapsed_ms:.2f}",
    )

    return result


async def resolve_many(
    domains: Iterable[str],
    options: ResolveOptions | None = None,
    concurrency: int = 10,
) -> list[ResolveResult]:
    """
    Resolve several domains, at most ``concurrency`` at a time.

    Results are returned in input order. Every domain is checked up front, so
    a blank entry raises EmptyDomainError before any network call.
    """
    if concurrency < 1:
        raise ValueError("concurrency must be at least 1")

    normalized = [normalize_domain(domain) for domain in domains]
    options = options or ResolveOptions()
    sem = asyncio.Semaphore(concurrency)

    async def _resolve_with_sem(domain: str) -> ResolveResult:
        async with sem:
            return await resolve(domain, options)

    logger.debug("Resolving batch", count=len(normalized), concurrency=concurrency)
    return list(await asyncio.gather(*[_resolve_with_sem(d) for d in normalized]))
