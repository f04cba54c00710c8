# Copyright 2024-2026 The AIDD Authors
# SPDX-License-Identifier: Apache-2.0

"""
DNS channel: read the profile from the TXT record at the reserved subdomain.

    _ai.{domain}. TXT "ai-json=<base64(compact JSON)>" ...

Publication over DNS is optional, so an absent record is not an error.
"""

from __future__ import annotations

import json

import structlog

from aidd.core.codec import TXT_PREFIX, decode_text
from aidd.core.config import ResolveOptions
from aidd.core.models import SourceState
from aidd.core.transport import bounded
from aidd.core.validator import validate_record

logger = structlog.get_logger(__name__)


def record_name(domain: str, options: ResolveOptions) -> str:
    """TXT owner name for domain, e.g. ``_ai.example.com``."""
    return f"{options.config.dns_label}.{domain}"


async def fetch_dns(domain: str, options: ResolveOptions) -> SourceState:
    """
    Retrieve, decode and validate the profile published over DNS.

    The cancellation signal is not forwarded here; the lookup is bounded by
    the timeout only.

    Args:
        domain: Normalized domain name.
        options: Resolve options supplying the TXT capability and timeout.

    Returns:
        SourceState with ``found`` True whenever an ``ai-json=`` value decoded
        to JSON, valid or not.
    """
    name = record_name(domain, options)
    logger.debug("Looking up TXT profile", fqdn=name)

    try:
        records = await bounded(
            options.dns_lookup(name),
            timeout=options.effective_timeout,
            timeout_message="DNS lookup timed out",
        )

        if not records:
            logger.debug("No TXT records", fqdn=name)
            return SourceState.missing()

        if not any(value.startswith(TXT_PREFIX) for value in records):
            logger.debug("TXT records lack payload prefix", fqdn=name, count=len(records))
            return SourceState.missing(
                f"TXT record found at {name} but missing {TXT_PREFIX} prefix."
            )

        decoded = decode_text(records)
        parsed = json.loads(decoded)

    except TimeoutError as e:
        logger.debug("TXT lookup timed out", fqdn=name)
        return SourceState.missing(str(e) or "DNS lookup timed out")
    except json.JSONDecodeError as e:
        logger.debug("TXT payload is not valid JSON", fqdn=name, error=str(e))
        return SourceState.missing(f"Payload is not valid JSON: {e}")
    except Exception as e:
        logger.debug("TXT lookup failed", fqdn=name, error=str(e))
        return SourceState.missing(str(e) or type(e).__name__)

    validation = validate_record(parsed)

    logger.debug(
        "Profile decoded from TXT",
        fqdn=name,
        valid=validation.valid,
        error_count=len(validation.errors),
    )

    return SourceState(
        found=True,
        payload=parsed if validation.valid else None,
        raw=decoded,
        errors=validation.errors,
    )
