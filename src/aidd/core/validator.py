# Copyright 2024-2026 The AIDD Authors
# SPDX-License-Identifier: Apache-2.0

"""
AIDD Validator: check candidate records against the v0.1 record shape.

This is the single validator shared by the resolver, the CLI, the generator
and the web adapter. ``validate`` is pure; ``strict_issues`` adds the advisory
checks the checker surfaces on top of the schema rules.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

import structlog
from pydantic import ValidationError

from aidd.core.models import SPEC_VERSION, DomainProfile, InvalidProfileError, is_uri

logger = structlog.get_logger(__name__)

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

JSONLD_CONTEXT = "https://schema.org"


@dataclass
class ValidationResult:
    """Outcome of validating a candidate record."""

    valid: bool
    errors: list[str] = field(default_factory=list)


def _format_error(error: dict[str, Any]) -> str:
    """Render a pydantic error as '<path>: <message>'."""
    loc = error.get("loc") or ()
    path = "/" + "/".join(str(part) for part in loc) if loc else "payload"

    if error.get("type") == "value_error" and "error" in error.get("ctx", {}):
        message = str(error["ctx"]["error"])
    else:
        message = error.get("msg", "is invalid")
    return f"{path}: {message}"


def validate(candidate: Any) -> ValidationResult:
    """
    Validate a parsed JSON value as an AI Domain Data record.

    All violations are collected. A non-object candidate short-circuits since
    no field checks can apply.

    Args:
        candidate: Any parsed JSON value.

    Returns:
        ValidationResult whose ``errors`` is empty iff ``valid`` is True.
    """
    if not isinstance(candidate, dict):
        return ValidationResult(valid=False, errors=["payload: must be a JSON object"])

    try:
        DomainProfile.model_validate(candidate)
    except ValidationError as e:
        errors = [_format_error(err) for err in e.errors()]
        return ValidationResult(valid=False, errors=errors)

    return ValidationResult(valid=True)


def validate_record(candidate: Any) -> ValidationResult:
    """
    Validation applied to records retrieved over HTTP or DNS.

    Re-checks ``spec`` after the structural pass so a record with a foreign
    spec identifier can never populate a payload.
    """
    result = validate(candidate)
    if not result.valid:
        return result

    if candidate.get("spec") != SPEC_VERSION:
        return ValidationResult(valid=False, errors=[f'spec must equal "{SPEC_VERSION}"'])

    return result


def assert_valid(candidate: Any) -> dict[str, Any]:
    """Return candidate unchanged, or raise InvalidProfileError listing every problem."""
    result = validate(candidate)
    if not result.valid:
        raise InvalidProfileError(
            f"Invalid AI Domain Data: {', '.join(result.errors)}", errors=result.errors
        )
    return candidate


def looks_like_contact(value: str) -> bool:
    """True if value looks like an email address or a URL."""
    value = value.strip()
    return bool(_EMAIL_RE.match(value)) or is_uri(value) or value.startswith("mailto:")


def strict_issues(record: Any) -> list[str]:
    """
    Advisory checks beyond the schema.

    These mirror what the checker reports to publishers: a contact that is
    neither an email nor a URL, and JSON-LD lacking a schema.org context or a
    type. They never affect ``validate``.
    """
    if not isinstance(record, dict):
        return []

    issues: list[str] = []

    contact = record.get("contact")
    if isinstance(contact, str) and contact.strip() and not looks_like_contact(contact):
        issues.append("contact must be a valid email or URL.")

    for key in ("name", "description", "website", "contact"):
        value = record.get(key)
        if isinstance(value, str) and value and not value.strip():
            issues.append(f"{key} is blank (whitespace only).")

    jsonld = record.get("jsonld")
    if isinstance(jsonld, dict):
        if "@context" not in jsonld:
            issues.append("jsonld must include @context field.")
        elif jsonld["@context"] != JSONLD_CONTEXT:
            issues.append(f'jsonld @context must equal "{JSONLD_CONTEXT}".')

        if "@type" not in jsonld:
            issues.append("jsonld must include @type field.")
        elif not isinstance(jsonld["@type"], str) or not jsonld["@type"]:
            issues.append("jsonld @type must be a non-empty string.")

    if issues:
        logger.debug("Strict checks reported issues", count=len(issues))
    return issues
