# Copyright 2024-2026 The AIDD Authors
# SPDX-License-Identifier: Apache-2.0

"""
AIDD: AI Domain Data

Tooling for the AI Domain Data record, a small identity declaration a domain
owner publishes at ``https://<domain>/.well-known/domain-profile.json`` and/or
as a TXT record at ``_ai.<domain>``.

Example:
    >>> import aidd
    >>>
    >>> # Resolve a domain's profile from HTTPS and DNS
    >>> result = await aidd.resolve("example.com")
    >>> print(result.source, result.valid)
    >>>
    >>> # Validate a record before publishing it
    >>> aidd.validate({"spec": aidd.SPEC_VERSION, "name": "Example"}).errors
"""

from __future__ import annotations

__version__ = "0.1.0"

from aidd.core.codec import decode, encode, format_txt_record, segment
from aidd.core.config import ProfileConfig, ResolveOptions, ResolverConfig
from aidd.core.generator import generate_profile, generate_profile_from_env
from aidd.core.models import (
    SPEC_VERSION,
    AIDDError,
    DecodeError,
    DomainProfile,
    EmptyDomainError,
    EntityType,
    InvalidProfileError,
    ResolveResult,
    SourceState,
)
from aidd.core.resolver import resolve, resolve_many
from aidd.core.validator import ValidationResult, strict_issues, validate

__all__ = [
    # Core functions
    "resolve",
    "resolve_many",
    "validate",
    "strict_issues",
    "generate_profile",
    "generate_profile_from_env",
    # Codec
    "encode",
    "decode",
    "segment",
    "format_txt_record",
    # Configuration
    "ResolveOptions",
    "ResolverConfig",
    "ProfileConfig",
    # Models
    "DomainProfile",
    "EntityType",
    "ResolveResult",
    "SourceState",
    "ValidationResult",
    "SPEC_VERSION",
    # Exceptions
    "AIDDError",
    "DecodeError",
    "EmptyDomainError",
    "InvalidProfileError",
    # Version
    "__version__",
]
