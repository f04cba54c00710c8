# Copyright 2024-2026 The AIDD Authors
# SPDX-License-Identifier: Apache-2.0

"""Shared fixtures for AIDD tests."""

from __future__ import annotations

from typing import Any

import pytest
import structlog

from aidd.core.config import ResolverConfig
from aidd.core.models import SPEC_VERSION


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo logging configuration done by CLI invocations."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def valid_record() -> dict[str, Any]:
    """Minimal valid record (required fields only)."""
    return {
        "spec": SPEC_VERSION,
        "name": "Example Organization",
        "description": "A test organization",
        "website": "https://example.com",
        "contact": "contact@example.com",
    }


@pytest.fixture
def complete_record(valid_record: dict[str, Any]) -> dict[str, Any]:
    """Valid record carrying every optional field."""
    return {
        **valid_record,
        "logo": "https://example.com/logo.png",
        "entity_type": "Organization",
        "jsonld": {
            "@context": "https://schema.org",
            "@type": "Organization",
            "name": "Example Organization",
            "url": "https://example.com",
        },
    }


@pytest.fixture
def fast_config() -> ResolverConfig:
    """Resolver config without the DNS stagger, for quick tests."""
    return ResolverConfig(dns_stagger_seconds=0)
