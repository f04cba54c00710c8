# Copyright 2024-2026 The AIDD Authors
# SPDX-License-Identifier: Apache-2.0

"""Core AIDD functionality."""

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
    "SPEC_VERSION",
    "AIDDError",
    "DecodeError",
    "DomainProfile",
    "EmptyDomainError",
    "EntityType",
    "InvalidProfileError",
    "ProfileConfig",
    "ResolveOptions",
    "ResolveResult",
    "ResolverConfig",
    "SourceState",
    "ValidationResult",
    "decode",
    "encode",
    "format_txt_record",
    "generate_profile",
    "generate_profile_from_env",
    "resolve",
    "resolve_many",
    "segment",
    "strict_issues",
    "validate",
]
