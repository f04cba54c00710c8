# Copyright 2024-2026 The AIDD Authors
# SPDX-License-Identifier: Apache-2.0

"""
FastAPI adapter for serving and checking AI Domain Data.

``create_profile_router`` serves a generated profile at the well-known path
with HTTP caching headers. ``create_app`` adds JSON endpoints backing the
generator and checker pages:

    GET  /.well-known/domain-profile.json   generated profile
    POST /api/generate                      profile + DNS payload for a config
    GET  /api/check?domain=example.com      resolve result + advisories
"""

from __future__ import annotations

from typing import Any

import structlog
from fastapi import APIRouter, FastAPI, HTTPException, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from aidd.core.config import DEFAULT_WELL_KNOWN_PATH, ProfileConfig, ResolveOptions
from aidd.core.generator import build_dns_payload, generate_profile, generate_profile_from_env
from aidd.core.models import EmptyDomainError, InvalidProfileError, ResolveResult
from aidd.core.resolver import resolve
from aidd.core.validator import strict_issues

logger = structlog.get_logger(__name__)

DEFAULT_CACHE_MAX_AGE = 3600


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class DnsPayloadResponse(BaseModel):
    name: str
    base64: str
    txt_strings: list[str]
    zone_record: str


class GenerateResponse(BaseModel):
    record: dict[str, Any]
    dns: DnsPayloadResponse


class CheckResponse(BaseModel):
    result: ResolveResult
    advisories: dict[str, list[str]]


# ---------------------------------------------------------------------------
# Well-known profile route
# ---------------------------------------------------------------------------


def create_profile_router(
    config: ProfileConfig | None = None,
    use_env: bool = True,
    cache_max_age: int = DEFAULT_CACHE_MAX_AGE,
    path: str = DEFAULT_WELL_KNOWN_PATH,
) -> APIRouter:
    """
    Build a router serving the domain profile at ``path``.

    The profile is generated per request from ``config`` or, when no config is
    given and ``use_env`` is true, from the environment. Generation failures
    produce a 500 with an ``error`` message.
    """
    router = APIRouter()

    @router.get(path, summary="AI Domain Data profile")
    def get_profile() -> JSONResponse:
        try:
            if config is not None:
                payload = generate_profile(config)
            elif use_env:
                payload = generate_profile_from_env()
            else:
                return JSONResponse(
                    status_code=500,
                    content={"error": "Either config or use_env must be provided"},
                )
        except InvalidProfileError as e:
            logger.error("Profile generation failed", error=str(e))
            return JSONResponse(status_code=500, content={"error": str(e)})

        return JSONResponse(
            content=payload,
            headers={"Cache-Control": f"public, max-age={cache_max_age}, s-maxage={cache_max_age}"},
        )

    return router


# ---------------------------------------------------------------------------
# Generator / checker API
# ---------------------------------------------------------------------------


def create_api_router(resolve_options: ResolveOptions | None = None) -> APIRouter:
    """Build the generator and checker JSON endpoints."""
    router = APIRouter()

    @router.post("/generate", response_model=GenerateResponse, summary="Generate a profile")
    def generate(
        config: ProfileConfig,
        domain: str = Query(default="example.com", description="Domain for the TXT record"),
    ) -> GenerateResponse:
        try:
            record = generate_profile(config)
        except InvalidProfileError as e:
            raise HTTPException(status_code=422, detail=e.errors) from e

        dns_payload = build_dns_payload(record, domain)
        return GenerateResponse(
            record=record,
            dns=DnsPayloadResponse(
                name=f"_ai.{domain}",
                base64=dns_payload.base64,
                txt_strings=dns_payload.txt_strings,
                zone_record=dns_payload.zone_record,
            ),
        )

    @router.get("/check", response_model=CheckResponse, summary="Check a domain")
    async def check(
        domain: str = Query(..., description="Domain to resolve"),
    ) -> CheckResponse:
        try:
            result = await resolve(domain, resolve_options)
        except EmptyDomainError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e

        advisories: dict[str, list[str]] = {}
        for key, state in (("http", result.details.http), ("dns", result.details.dns)):
            if state.payload is not None:
                advisories[key] = strict_issues(state.payload)

        return CheckResponse(result=result, advisories=advisories)

    return router


def create_app(
    config: ProfileConfig | None = None,
    use_env: bool = True,
    cache_max_age: int = DEFAULT_CACHE_MAX_AGE,
    resolve_options: ResolveOptions | None = None,
) -> FastAPI:
    """FastAPI application with the profile route and the /api endpoints."""
    from aidd import __version__

    app = FastAPI(
        title="aidd",
        description="AI Domain Data generator and checker",
        version=__version__,
    )
    app.include_router(create_profile_router(config, use_env, cache_max_age))
    app.include_router(create_api_router(resolve_options), prefix="/api")
    return app
