# Copyright 2024-2026 The AIDD Authors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the shared record validator."""

import pytest

from aidd.core.models import ENTITY_TYPES, SPEC_VERSION, InvalidProfileError
from aidd.core.validator import (
    ValidationResult,
    assert_valid,
    looks_like_contact,
    strict_issues,
    validate,
    validate_record,
)


class TestValidRecords:
    """Records that must pass."""

    def test_minimal_record(self, valid_record):
        result = validate(valid_record)
        assert result.valid is True
        assert result.errors == []

    def test_complete_record(self, complete_record):
        assert validate(complete_record).valid is True

    @pytest.mark.parametrize("entity_type", ENTITY_TYPES)
    def test_every_entity_type(self, valid_record, entity_type):
        valid_record["entity_type"] = entity_type
        assert validate(valid_record).valid is True

    def test_whitespace_only_strings_pass_length_check(self, valid_record):
        valid_record["name"] = "   "
        assert validate(valid_record).valid is True

    @pytest.mark.parametrize(
        "contact",
        ["user@example.com", "https://example.com/contact", "mailto:user@example.com", "anything"],
    )
    def test_contact_has_no_format_constraint(self, valid_record, contact):
        valid_record["contact"] = contact
        assert validate(valid_record).valid is True

    @pytest.mark.parametrize(
        "website",
        [
            "https://example.com",
            "http://example.com/path?q=1#frag",
            "https://192.168.1.1",
            "https://[2001:db8::1]/",
            "https://münchen.de",
            "https://example.com:8443",
        ],
    )
    def test_website_uri_variants(self, valid_record, website):
        valid_record["website"] = website
        assert validate(valid_record).valid is True

    def test_empty_jsonld_object(self, valid_record):
        valid_record["jsonld"] = {}
        assert validate(valid_record).valid is True


class TestInvalidRecords:
    """Records that must be rejected."""

    @pytest.mark.parametrize("candidate", [None, [], ["a"], "record", 42, True])
    def test_non_object(self, candidate):
        result = validate(candidate)
        assert result.valid is False
        assert result.errors == ["payload: must be a JSON object"]

    @pytest.mark.parametrize("field", ["spec", "name", "description", "website", "contact"])
    def test_missing_required_field(self, valid_record, field):
        del valid_record[field]
        result = validate(valid_record)
        assert result.valid is False
        assert f"/{field}: Field required" in result.errors

    @pytest.mark.parametrize("field", ["name", "description", "website", "contact"])
    def test_empty_required_string(self, valid_record, field):
        valid_record[field] = ""
        result = validate(valid_record)
        assert result.valid is False
        assert any(e.startswith(f"/{field}:") for e in result.errors)

    def test_name_not_a_string(self, valid_record):
        valid_record["name"] = 123
        result = validate(valid_record)
        assert result.valid is False
        assert any(e.startswith("/name:") for e in result.errors)

    @pytest.mark.parametrize(
        "spec",
        [
            "https://ai-domain-data.org/spec/v0.2",
            "https://ai-domain-data.org/spec/v0.1/",
            "v0.1",
        ],
    )
    def test_wrong_spec_version(self, valid_record, spec):
        valid_record["spec"] = spec
        result = validate(valid_record)
        assert result.valid is False
        assert result.errors == [f'/spec: spec must equal "{SPEC_VERSION}"']

    @pytest.mark.parametrize("website", ["not a url", "example.com", "https://", "//example.com"])
    def test_website_not_a_uri(self, valid_record, website):
        valid_record["website"] = website
        result = validate(valid_record)
        assert result.valid is False
        assert result.errors == ["/website: must be a valid URI"]

    def test_logo_not_a_uri(self, valid_record):
        valid_record["logo"] = "logo.png"
        result = validate(valid_record)
        assert result.errors == ["/logo: must be a valid URI"]

    def test_entity_type_outside_enumeration(self, valid_record):
        valid_record["entity_type"] = "business"
        result = validate(valid_record)
        assert result.valid is False
        assert len(result.errors) == 1
        message = result.errors[0]
        assert message.startswith("/entity_type:")
        assert "'business'" in message
        assert "Organization" in message
        assert "SoftwareApplication" in message

    def test_entity_type_not_a_string(self, valid_record):
        valid_record["entity_type"] = 123
        assert validate(valid_record).valid is False

    @pytest.mark.parametrize("jsonld", ["{}", [], [{"@type": "Thing"}], 5, True])
    def test_jsonld_not_an_object(self, valid_record, jsonld):
        valid_record["jsonld"] = jsonld
        result = validate(valid_record)
        assert result.valid is False
        assert any(e.startswith("/jsonld:") for e in result.errors)

    @pytest.mark.parametrize("field", ["logo", "entity_type", "jsonld"])
    def test_explicit_null_optional_field(self, valid_record, field):
        valid_record[field] = None
        result = validate(valid_record)
        assert result.valid is False
        assert result.errors == [f"/{field}: must be omitted rather than set to null"]

    def test_extra_property(self, valid_record):
        valid_record["tagline"] = "extra"
        result = validate(valid_record)
        assert result.valid is False
        assert result.errors == ["/tagline: Extra inputs are not permitted"]

    def test_all_violations_collected(self, valid_record):
        del valid_record["name"]
        valid_record["spec"] = "https://ai-domain-data.org/spec/v0.2"
        valid_record["website"] = "nope"
        valid_record["unknown"] = True

        result = validate(valid_record)

        paths = {e.split(":", 1)[0] for e in result.errors}
        assert paths == {"/name", "/spec", "/website", "/unknown"}

    def test_errors_empty_iff_valid(self, valid_record):
        for candidate in (valid_record, {**valid_record, "x": 1}):
            result = validate(candidate)
            assert result.valid is (result.errors == [])


class TestValidatorBehaviour:
    def test_deterministic(self, valid_record):
        valid_record["entity_type"] = "business"
        assert validate(valid_record) == validate(valid_record)

    def test_does_not_mutate_input(self, complete_record):
        snapshot = {**complete_record, "jsonld": dict(complete_record["jsonld"])}
        validate(complete_record)
        assert complete_record == snapshot

    def test_validate_record_passes_valid(self, valid_record):
        assert validate_record(valid_record) == ValidationResult(valid=True, errors=[])

    def test_validate_record_rejects_spec_mismatch(self, valid_record):
        valid_record["spec"] = "https://ai-domain-data.org/spec/v0.2"
        result = validate_record(valid_record)
        assert result.valid is False
        assert any("spec must equal" in e for e in result.errors)

    def test_assert_valid_returns_record(self, valid_record):
        assert assert_valid(valid_record) is valid_record

    def test_assert_valid_raises(self, valid_record):
        del valid_record["contact"]
        with pytest.raises(InvalidProfileError) as exc_info:
            assert_valid(valid_record)
        assert exc_info.value.errors == ["/contact: Field required"]
        assert "Invalid AI Domain Data" in str(exc_info.value)


class TestStrictIssues:
    """Advisory checks applied by the checker."""

    def test_clean_record(self, complete_record):
        assert strict_issues(complete_record) == []

    def test_contact_not_email_or_url(self, valid_record):
        valid_record["contact"] = "call us"
        assert strict_issues(valid_record) == ["contact must be a valid email or URL."]

    @pytest.mark.parametrize(
        "contact", ["a@b.co", "https://example.com/contact", "mailto:a@b.co"]
    )
    def test_looks_like_contact(self, contact):
        assert looks_like_contact(contact) is True

    def test_blank_strings_reported(self, valid_record):
        valid_record["description"] = "   "
        assert strict_issues(valid_record) == ["description is blank (whitespace only)."]

    def test_jsonld_missing_context_and_type(self, valid_record):
        valid_record["jsonld"] = {"name": "x"}
        assert strict_issues(valid_record) == [
            "jsonld must include @context field.",
            "jsonld must include @type field.",
        ]

    def test_jsonld_wrong_context_and_empty_type(self, valid_record):
        valid_record["jsonld"] = {"@context": "http://schema.org", "@type": ""}
        assert strict_issues(valid_record) == [
            'jsonld @context must equal "https://schema.org".',
            "jsonld @type must be a non-empty string.",
        ]

    def test_non_object_has_no_issues(self):
        assert strict_issues(["not", "a", "record"]) == []
