# Copyright 2024-2026 The AIDD Authors
# SPDX-License-Identifier: Apache-2.0

"""
Build publishable domain profiles from configuration.

The generator is used by the CLI ``emit`` command and the web adapter. It
always stamps the supported spec version, omits unset optional fields and
refuses to return a record that does not validate.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import structlog

from aidd.core.codec import encode, format_dns_record, segment, txt_strings
from aidd.core.config import DEFAULT_DNS_LABEL, ProfileConfig
from aidd.core.models import SPEC_VERSION, InvalidProfileError
from aidd.core.validator import validate

logger = structlog.get_logger(__name__)

TEMPLATE_PROFILE: dict[str, str] = {
    "spec": SPEC_VERSION,
    "name": "Your Site or Organization",
    "description": "Concise description of what your domain provides.",
    "website": "https://example.com",
    "contact": "contact@example.com",
}


@dataclass
class DnsPayload:
    """Everything a publisher needs to mirror a record into DNS."""

    base64: str
    segments: list[str]
    txt_strings: list[str]
    zone_record: str


def generate_profile(config: ProfileConfig) -> dict[str, Any]:
    """
    Generate a validated profile record.

    Raises:
        InvalidProfileError: If the resulting record does not validate.
    """
    record: dict[str, Any] = {
        "spec": SPEC_VERSION,
        "name": config.name,
        "description": config.description,
        "website": config.website,
        "contact": config.contact,
    }
    if config.logo:
        record["logo"] = config.logo
    if config.entity_type:
        record["entity_type"] = config.entity_type
    if config.jsonld:
        record["jsonld"] = config.jsonld

    result = validate(record)
    if not result.valid:
        logger.warning("Generated profile is invalid", errors=result.errors)
        raise InvalidProfileError(
            f"Invalid AI Domain Data configuration: {', '.join(result.errors)}",
            errors=result.errors,
        )

    return record


def generate_profile_from_env(environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Generate a profile from ``ProfileConfig.from_env``."""
    return generate_profile(ProfileConfig.from_env(environ))


def build_dns_payload(
    record: Mapping[str, Any],
    domain: str = "example.com",
    label: str = DEFAULT_DNS_LABEL,
) -> DnsPayload:
    """Encode record for the ``_ai.{domain}`` TXT record."""
    encoded = encode(dict(record))
    return DnsPayload(
        base64=encoded,
        segments=segment(encoded),
        txt_strings=txt_strings(encoded),
        zone_record=format_dns_record(encoded, domain, label),
    )
