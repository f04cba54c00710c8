# Copyright 2024-2026 The AIDD Authors
# SPDX-License-Identifier: Apache-2.0

"""
HTTP channel: fetch the profile from the domain's well-known path.

    GET https://{domain}/.well-known/domain-profile.json
    Accept: application/json

Every failure is reported in the returned SourceState; nothing is raised.
"""

from __future__ import annotations

import json

import structlog

from aidd.core.config import ResolveOptions
from aidd.core.models import SourceState
from aidd.core.transport import FetchAbortedError, bounded
from aidd.core.validator import validate_record

logger = structlog.get_logger(__name__)

MISSING_FETCH_ERROR = "No HTTP fetch implementation is available. Provide options.fetch_impl."


def well_known_url(domain: str, options: ResolveOptions) -> str:
    """Canonical retrieval URL for domain."""
    return f"https://{domain}{options.config.well_known_path}"


async def fetch_http(domain: str, options: ResolveOptions) -> SourceState:
    """
    Retrieve and validate the profile published over HTTPS.

    Args:
        domain: Normalized domain name.
        options: Resolve options supplying the HTTP capability, signal and timeout.

    Returns:
        SourceState with ``found`` True whenever a 2xx JSON body was retrieved,
        valid or not.
    """
    fetcher = options.fetch_impl
    if fetcher is None:
        logger.warning("HTTP channel has no fetch implementation", domain=domain)
        return SourceState.missing(MISSING_FETCH_ERROR)

    url = well_known_url(domain, options)
    headers = {
        "Accept": "application/json",
        "Cache-Control": "no-cache",
        "Pragma": "no-cache",
        "User-Agent": options.config.user_agent,
    }

    logger.debug("Fetching profile over HTTPS", url=url)

    try:
        response = await bounded(
            fetcher(url, headers=headers),
            timeout=options.effective_timeout,
            signal=options.signal,
            timeout_message="HTTP fetch timed out",
            abort_message="HTTP fetch aborted",
        )

        if not response.is_success:
            logger.debug("Profile fetch failed", url=url, status_code=response.status_code)
            return SourceState.missing(f"HTTP {response.status_code} {response.reason_phrase}")

        text = response.text
        parsed = json.loads(text)

    except TimeoutError as e:
        logger.debug("Profile fetch timed out", url=url)
        return SourceState.missing(str(e) or "HTTP fetch timed out")
    except FetchAbortedError as e:
        logger.debug("Profile fetch aborted", url=url)
        return SourceState.missing(str(e))
    except json.JSONDecodeError as e:
        logger.debug("Profile is not valid JSON", url=url, error=str(e))
        return SourceState.missing(f"Invalid JSON: {e}")
    except Exception as e:
        logger.debug("Profile fetch error", url=url, error=str(e))
        return SourceState.missing(str(e) or type(e).__name__)

    validation = validate_record(parsed)

    logger.debug(
        "Profile fetched over HTTPS",
        url=url,
        valid=validation.valid,
        error_count=len(validation.errors),
    )

    return SourceState(
        found=True,
        payload=parsed if validation.valid else None,
        raw=text,
        errors=validation.errors,
    )
