# Copyright 2024-2026 The AIDD Authors
# SPDX-License-Identifier: Apache-2.0

"""
Configuration objects.

Configuration is always passed explicitly. ``from_env`` classmethods are the
only place environment variables are consulted.
"""

from __future__ import annotations

import asyncio
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, Field

from aidd.core.models import ENTITY_TYPES
from aidd.core.transport import HttpFetch, TxtLookup, dnspython_txt_lookup, httpx_fetch

DEFAULT_WELL_KNOWN_PATH = "/.well-known/domain-profile.json"
DEFAULT_DNS_LABEL = "_ai"


def _default_user_agent() -> str:
    from aidd import __version__

    return f"aidd/{__version__}"


class ResolverConfig(BaseModel):
    """Configuration for the resolver."""

    timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Timeout applied to each network step. None disables it.",
    )
    dns_stagger_seconds: float = Field(
        default=0.01,
        ge=0,
        description="Delay before the DNS lookup starts, relative to the HTTP fetch.",
    )
    well_known_path: str = Field(
        default=DEFAULT_WELL_KNOWN_PATH,
        description="Path of the profile file on the domain's HTTPS origin.",
    )
    dns_label: str = Field(
        default=DEFAULT_DNS_LABEL,
        description="Reserved label prepended to the domain for the TXT lookup.",
    )
    user_agent: str = Field(
        default_factory=_default_user_agent,
        description="User-Agent header sent with HTTP fetches.",
    )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ResolverConfig:
        """Build config from environment variables."""
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        if env.get("AIDD_TIMEOUT"):
            values["timeout_seconds"] = float(env["AIDD_TIMEOUT"])
        if env.get("AIDD_DNS_STAGGER"):
            values["dns_stagger_seconds"] = float(env["AIDD_DNS_STAGGER"])
        if env.get("AIDD_WELL_KNOWN_PATH"):
            values["well_known_path"] = env["AIDD_WELL_KNOWN_PATH"]
        if env.get("AIDD_USER_AGENT"):
            values["user_agent"] = env["AIDD_USER_AGENT"]
        return cls(**values)


def _env_value(env: Mapping[str, str], *names: str) -> str:
    """Return the first non-empty variable, trimmed and with surrounding quotes removed."""
    for name in names:
        value = env.get(name)
        if value:
            value = value.strip()
            if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
                value = value[1:-1]
            return value
    return ""


class ProfileConfig(BaseModel):
    """Inputs for generating a domain profile."""

    name: str = Field(default="", description="Display name of the domain owner")
    description: str = Field(default="", description="Short description")
    website: str = Field(default="", description="Canonical website URL")
    contact: str = Field(default="", description="Contact email or URL")
    logo: str | None = Field(default=None, description="Logo URL")
    entity_type: str | None = Field(default=None, description="schema.org @type")
    jsonld: dict[str, Any] | None = Field(default=None, description="JSON-LD object")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ProfileConfig:
        """
        Build config from environment variables.

        Recognized keys (first match wins):
            AIDD_SITE_NAME / SITE_NAME
            AIDD_SITE_DESCRIPTION / SITE_DESCRIPTION
            AIDD_SITE_URL / SITE_URL
            AIDD_SITE_CONTACT / SITE_CONTACT
            AIDD_SITE_LOGO / SITE_LOGO
            AIDD_ENTITY_TYPE / ENTITY_TYPE (ignored unless a known schema.org type)
        """
        env = os.environ if environ is None else environ

        entity_type = _env_value(env, "AIDD_ENTITY_TYPE", "ENTITY_TYPE")
        return cls(
            name=_env_value(env, "AIDD_SITE_NAME", "SITE_NAME"),
            description=_env_value(env, "AIDD_SITE_DESCRIPTION", "SITE_DESCRIPTION"),
            website=_env_value(env, "AIDD_SITE_URL", "SITE_URL"),
            contact=_env_value(env, "AIDD_SITE_CONTACT", "SITE_CONTACT"),
            logo=_env_value(env, "AIDD_SITE_LOGO", "SITE_LOGO") or None,
            entity_type=entity_type if entity_type in ENTITY_TYPES else None,
        )


@dataclass
class ResolveOptions:
    """
    Per-call options for resolve().

    Attributes:
        fetch_impl: HTTP capability. Set to None to run without one; the HTTP
            channel then reports a configuration error.
        dns_lookup: TXT capability.
        signal: Cancellation signal forwarded to the HTTP fetch only.
        timeout: Seconds allowed for each network step; overrides
            ``config.timeout_seconds``.
        config: Resolver configuration.
    """

    fetch_impl: HttpFetch | None = field(default=httpx_fetch)
    dns_lookup: TxtLookup = field(default=dnspython_txt_lookup)
    signal: asyncio.Event | None = None
    timeout: float | None = None
    config: ResolverConfig = field(default_factory=ResolverConfig)

    @property
    def effective_timeout(self) -> float | None:
        return self.timeout if self.timeout is not None else self.config.timeout_seconds
