# Copyright 2024-2026 The AIDD Authors
# SPDX-License-Identifier: Apache-2.0

"""
Base64/TXT codec for the DNS publication channel.

Record format:
    _ai.{domain}. TXT "ai-json=<base64 part 1>" "<base64 part 2>" ...

The payload is the compact JSON record, UTF-8 encoded and Base64 encoded with
the standard alphabet. TXT character-strings are limited to 255 bytes, so the
Base64 text is split into ordered segments; resolvers concatenate them before
the prefix is stripped.
"""

from __future__ import annotations

import base64
import binascii
import json
from collections.abc import Iterable, Sequence
from typing import Any

from aidd.core.models import DecodeError

TXT_PREFIX = "ai-json="
MAX_SEGMENT_LENGTH = 255


def encode(record: Any) -> str:
    """Serialize record as compact JSON and Base64-encode its UTF-8 bytes."""
    compact = json.dumps(record, separators=(",", ":"), ensure_ascii=False)
    return base64.b64encode(compact.encode("utf-8")).decode("ascii")


def segment(value: str, max_len: int = MAX_SEGMENT_LENGTH) -> list[str]:
    """
    Split value into ordered chunks of at most max_len characters.

    An empty value yields a single empty segment.
    """
    if max_len < 1:
        raise ValueError("max_len must be positive")
    if not value:
        return [""]
    return [value[i : i + max_len] for i in range(0, len(value), max_len)]


def txt_strings(encoded: str, prefix: str = TXT_PREFIX) -> list[str]:
    """Segments of encoded with the prefix on the first one, ready for a DNS console."""
    segments = segment(encoded)
    segments[0] = f"{prefix}{segments[0]}"
    return segments


def format_txt_record(segments: Sequence[str], prefix: str = TXT_PREFIX) -> str:
    """
    Present segments as TXT multi-string syntax.

    Example:
        >>> format_txt_record(["abc", "def"])
        '"ai-json=abc" "def"'
    """
    parts = list(segments) or [""]
    quoted = [f'"{prefix}{parts[0]}"'] + [f'"{part}"' for part in parts[1:]]
    return " ".join(quoted)


def format_dns_record(encoded: str, domain: str = "example.com", label: str = "_ai") -> str:
    """Zone-file style line for the record, e.g. ``_ai.example.com TXT ("ai-json=...")``."""
    return f"{label}.{domain} TXT ({format_txt_record(segment(encoded))})"


def decode_text(txt_values: Iterable[str], prefix: str = TXT_PREFIX) -> str:
    """
    Extract the JSON text carried by a set of TXT values.

    Each value must already be the concatenation of its record's
    character-strings.

    Raises:
        DecodeError: If no value carries the prefix or the payload is not
            valid standard Base64 of UTF-8 text.
    """
    payload = next((value for value in txt_values if value.startswith(prefix)), None)
    if payload is None:
        raise DecodeError(f"No TXT value starts with {prefix}")

    encoded = payload[len(prefix) :]
    try:
        raw = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f"Invalid Base64 payload: {e}") from e

    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeError(f"Payload is not valid UTF-8: {e}") from e


def decode(txt_values: Iterable[str], prefix: str = TXT_PREFIX) -> Any:
    """
    Decode TXT values into the parsed JSON record.

    Raises:
        DecodeError: On a missing prefix, bad Base64, bad UTF-8 or bad JSON.
    """
    text = decode_text(txt_values, prefix)
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise DecodeError(f"Payload is not valid JSON: {e}") from e
