# Copyright 2024-2026 The AIDD Authors
# SPDX-License-Identifier: Apache-2.0

"""
Data models for AI Domain Data.

These models represent the published domain profile record, the outcome of
probing a single publication channel, and the reconciled resolution result.
"""

from __future__ import annotations

import re
from enum import StrEnum
from typing import Any, Literal
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

SPEC_VERSION = "https://ai-domain-data.org/spec/v0.1"

# Keys a published record may carry; anything else is rejected.
RECORD_FIELDS: tuple[str, ...] = (
    "spec",
    "name",
    "description",
    "website",
    "contact",
    "logo",
    "entity_type",
    "jsonld",
)

REQUIRED_FIELDS: tuple[str, ...] = ("spec", "name", "description", "website", "contact")

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")


class AIDDError(Exception):
    """Base class for errors raised by the AIDD library."""


class EmptyDomainError(AIDDError, ValueError):
    """Raised when resolve() is called with a blank domain."""


class DecodeError(AIDDError, ValueError):
    """Raised when a DNS TXT payload cannot be decoded into JSON."""


class InvalidProfileError(AIDDError, ValueError):
    """Raised when a generated or loaded profile fails validation.

    The individual validation messages are kept on ``errors``.
    """

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class EntityType(StrEnum):
    """schema.org @type values accepted for ``entity_type``."""

    ORGANIZATION = "Organization"
    PERSON = "Person"
    BLOG = "Blog"
    NGO = "NGO"
    COMMUNITY = "Community"
    PROJECT = "Project"
    CREATIVE_WORK = "CreativeWork"
    SOFTWARE_APPLICATION = "SoftwareApplication"
    THING = "Thing"


ENTITY_TYPES: tuple[str, ...] = tuple(e.value for e in EntityType)


def is_uri(value: str) -> bool:
    """Return True if value parses as an absolute URI with an authority."""
    if not value or any(ch.isspace() for ch in value):
        return False
    try:
        parts = urlsplit(value)
        # Accessing port validates the authority (bad ports, unbalanced brackets)
        parts.port  # noqa: B018
    except ValueError:
        return False
    if not parts.scheme or not _SCHEME_RE.match(parts.scheme):
        return False
    return bool(parts.netloc) and bool(parts.hostname)


class DomainProfile(BaseModel):
    """
    Typed form of a published AI Domain Data record.

    Example:
        >>> profile = DomainProfile(
        ...     spec=SPEC_VERSION,
        ...     name="Example",
        ...     description="An example organization",
        ...     website="https://example.com",
        ...     contact="hello@example.com",
        ... )
        >>> profile.to_record()["name"]
        'Example'
    """

    model_config = ConfigDict(extra="forbid")

    spec: str = Field(..., min_length=1, description="Spec version identifier")
    name: str = Field(..., min_length=1, description="Display name of the domain owner")
    description: str = Field(..., min_length=1, description="Short description")
    website: str = Field(..., min_length=1, description="Canonical website URI")
    contact: str = Field(..., min_length=1, description="Contact email or URL")

    logo: str | None = Field(default=None, description="Logo URI")
    entity_type: str | None = Field(default=None, description="schema.org @type of the entity")
    jsonld: dict[str, Any] | None = Field(default=None, description="Embedded JSON-LD object")

    @field_validator("spec")
    @classmethod
    def validate_spec(cls, v: str) -> str:
        if v != SPEC_VERSION:
            raise ValueError(f'spec must equal "{SPEC_VERSION}"')
        return v

    @field_validator("website", "logo")
    @classmethod
    def validate_uri(cls, v: str | None) -> str | None:
        if v is not None and not is_uri(v):
            raise ValueError("must be a valid URI")
        return v

    @field_validator("entity_type")
    @classmethod
    def validate_entity_type(cls, v: str | None) -> str | None:
        if v is not None and v not in ENTITY_TYPES:
            raise ValueError(
                f"must be one of {', '.join(ENTITY_TYPES)}; received {v!r}"
            )
        return v

    @field_validator("logo", "entity_type", "jsonld", mode="before")
    @classmethod
    def reject_explicit_null(cls, v: Any) -> Any:
        # Only runs for keys present in the input; omitted keys keep their default.
        if v is None:
            raise ValueError("must be omitted rather than set to null")
        return v

    def to_record(self) -> dict[str, Any]:
        """Serialize to the wire form, omitting unset optional fields."""
        return self.model_dump(exclude_none=True)


class SourceState(BaseModel):
    """Outcome of probing a single publication channel."""

    found: bool = Field(default=False, description="Anything retrievable at the location")
    payload: dict[str, Any] | None = Field(
        default=None, description="Parsed record, only when found and valid"
    )
    raw: str | None = Field(default=None, description="Decoded text, whenever retrieved")
    errors: list[str] = Field(default_factory=list, description="Retrieval/validation errors")

    @model_validator(mode="after")
    def check_payload_invariant(self) -> SourceState:
        if self.payload is not None and (not self.found or self.errors):
            raise ValueError("payload may only be set when found is true and errors is empty")
        return self

    @classmethod
    def missing(cls, *errors: str) -> SourceState:
        """Nothing usable was retrieved from the channel."""
        return cls(found=False, errors=list(errors))


class ResolveDetails(BaseModel):
    """Per-channel states, always both present."""

    http: SourceState
    dns: SourceState


class ResolveResult(BaseModel):
    """
    Result of resolving AI Domain Data for a domain.

    ``details`` always carries both channel states so callers can see why a
    channel was or was not chosen.
    """

    domain: str = Field(..., description="Normalized domain that was resolved")
    source: Literal["http", "dns", "none"] = Field(..., description="Channel that was chosen")
    valid: bool = Field(default=False, description="A payload was chosen with zero errors")
    payload: dict[str, Any] | None = Field(default=None, description="Selected record")
    errors: list[str] | None = Field(
        default=None, description="Errors of the chosen channel, None when there are none"
    )
    details: ResolveDetails
    query_time_ms: float = Field(default=0.0, description="Wall-clock resolution time")
