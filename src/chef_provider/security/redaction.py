"""
chef-provider — credential redaction

File: src/chef_provider/security/redaction.py
Last updated: 2026-10-16

Purpose
- Keep client keys out of logs, CLI output and config dumps.

What should be included in this file
- Sensitive attribute names (``private_key_pem``, ``key_material``, ...).
- Text rules for PEM private-key blocks and ``key=value`` style assignments.
- Deterministic structure walker used by the log processor and config dumps.

Functional requirements
- Redaction is idempotent and never mutates its input.

Non-functional requirements
- Prefer over-redaction of key-named fields to leaking key material.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Final

REDACTED_VALUE: Final[str] = "***REDACTED***"

DEFAULT_SENSITIVE_KEY_DENYLIST: Final[frozenset[str]] = frozenset(
    {
        "client_key",
        "credential",
        "credentials",
        "key",
        "key_material",
        "password",
        "private_key",
        "private_key_pem",
        "secret",
        "token",
    }
)

_SENSITIVE_KEY_SUFFIXES: Final[tuple[str, ...]] = (
    "_key_material",
    "_private_key",
    "_key_pem",
    "_password",
    "_secret",
    "_token",
)

_CAMEL_CASE_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_NON_ALNUM = re.compile(r"[^a-z0-9]+")


@dataclass(frozen=True, slots=True)
class _TextRule:
    name: str
    pattern: re.Pattern[str]
    sensitive_group: int | None = None


_TEXT_RULES: Final[tuple[_TextRule, ...]] = (
    _TextRule(
        name="private_key_block",
        pattern=re.compile(
            r"-----BEGIN(?: [A-Z0-9]+)* PRIVATE KEY-----"
            r"[\s\S]+?"
            r"-----END(?: [A-Z0-9]+)* PRIVATE KEY-----"
        ),
    ),
    _TextRule(
        name="explicit_secret_assignment",
        pattern=re.compile(
            r"(?i)(\b(?:password|secret|key_material|private_key_pem|client_key)\b"
            r"\s*[:=]\s*[\"']?)"
            r"([A-Za-z0-9._~+/=-]{6,})"
        ),
        sensitive_group=2,
    ),
)


@dataclass(frozen=True, slots=True)
class RedactionConfig:
    """Policy that controls which keys are masked and with what."""

    replacement: str = REDACTED_VALUE
    key_allowlist: frozenset[str] = frozenset()
    key_denylist: frozenset[str] = DEFAULT_SENSITIVE_KEY_DENYLIST


DEFAULT_REDACTION_CONFIG: Final[RedactionConfig] = RedactionConfig()


def is_sensitive_key(key: str, *, config: RedactionConfig | None = None) -> bool:
    """Return whether values stored under ``key`` must be masked."""

    policy = config if config is not None else DEFAULT_REDACTION_CONFIG
    normalized = _normalize_key(key)
    if not normalized or normalized in policy.key_allowlist:
        return False
    if normalized in policy.key_denylist:
        return True
    return any(normalized.endswith(suffix) for suffix in _SENSITIVE_KEY_SUFFIXES)


def redact_text(text: str, *, config: RedactionConfig | None = None) -> str:
    """Mask PEM blocks and secret assignments inside free text."""

    if not isinstance(text, str):
        raise TypeError(f"text must be a string, got {type(text).__name__}")

    policy = config if config is not None else DEFAULT_REDACTION_CONFIG
    redacted = text
    for rule in _TEXT_RULES:
        redacted = rule.pattern.sub(
            lambda match, rule=rule: _replace_sensitive_group(
                match, replacement=policy.replacement, group=rule.sensitive_group
            ),
            redacted,
        )
    return redacted


def redact_structure(value: object, *, config: RedactionConfig | None = None) -> object:
    """Return a deep-redacted copy of nested mappings, lists and tuples."""

    policy = config if config is not None else DEFAULT_REDACTION_CONFIG
    return _redact_structure(value, policy=policy, seen=set())


def _redact_structure(value: object, *, policy: RedactionConfig, seen: set[int]) -> object:
    if value is None or isinstance(value, (bool, int, float)):
        return value

    if isinstance(value, str):
        return redact_text(value, config=policy)

    if isinstance(value, (Mapping, list, tuple)):
        value_id = id(value)
        if value_id in seen:
            return policy.replacement
        seen.add(value_id)
        try:
            if isinstance(value, Mapping):
                out: dict[object, object] = {}
                for key in sorted(value, key=str):
                    item = value[key]
                    if isinstance(key, str) and is_sensitive_key(key, config=policy):
                        out[key] = policy.replacement if item not in (None, "") else item
                    else:
                        out[key] = _redact_structure(item, policy=policy, seen=seen)
                return out
            items = [_redact_structure(item, policy=policy, seen=seen) for item in value]
            return tuple(items) if isinstance(value, tuple) else items
        finally:
            seen.discard(value_id)

    return value


def _replace_sensitive_group(
    match: re.Match[str],
    *,
    replacement: str,
    group: int | None,
) -> str:
    if group is None:
        return replacement

    full = match.group(0)
    start, end = match.span(group)
    offset_start = start - match.start(0)
    offset_end = end - match.start(0)
    return f"{full[:offset_start]}{replacement}{full[offset_end:]}"


def _normalize_key(key: str) -> str:
    with_boundaries = _CAMEL_CASE_BOUNDARY.sub(r"\1_\2", key.strip())
    return _NON_ALNUM.sub("_", with_boundaries.lower()).strip("_")


__all__ = [
    "DEFAULT_REDACTION_CONFIG",
    "DEFAULT_SENSITIVE_KEY_DENYLIST",
    "REDACTED_VALUE",
    "RedactionConfig",
    "is_sensitive_key",
    "redact_structure",
    "redact_text",
]
