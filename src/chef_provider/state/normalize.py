"""
chef-provider — state normalization

File: src/chef_provider/state/normalize.py
Last updated: 2026-10-16

Purpose
- Rewrite values destined for recorded state into a canonical form so the diff
  engine never reports semantically-equal representations as drift.

What should be included in this file
- Structured (JSON object) canonicalization with a fixed "no value" fallback.
- Run-list entry canonicalization (bare name -> ``recipe[name]``).
- The stricter structured-document validator used before normalization.

Functional requirements
- Normalizers never raise on malformed input and are idempotent.
- Output is independent of key order and incidental whitespace.

Non-functional requirements
- Standard library only; pure functions with no side effects.
"""

from __future__ import annotations

import json
import math
from collections.abc import Callable, Iterable
from typing import Any, Final, TypeAlias

from chef_provider.constants import DEFAULT_RUN_LIST_TAG, NO_VALUE, RUN_LIST_TAG_OPEN

StateNormalizer: TypeAlias = Callable[[Any], str]

_CANONICAL_SEPARATORS: Final[tuple[str, str]] = (",", ":")


class _NonFiniteNumber(ValueError):
    """Raised while parsing when a number cannot be represented canonically."""


def normalize_structured(value: object) -> str:
    """Return the canonical JSON text for ``value`` or ``NO_VALUE``.

    Only JSON objects are considered structured state. Anything else (non-string
    input, unparsable text, arrays, scalars, ``null`` or non-finite numbers)
    collapses to ``NO_VALUE`` so the comparator always has a string to compare.
    """

    parsed = _parse_object(value)
    if parsed is None:
        return NO_VALUE
    return _dump_canonical(parsed)


def normalize_run_list_entry(value: str) -> str:
    """Qualify a bare run-list entry as a recipe.

    The Chef server always reports entries in their tagged form, so a bare
    ``"foo"`` is stored as ``"recipe[foo]"``. Entries that already contain a tag
    opener are returned unchanged; their bracket structure is not checked.
    """

    if RUN_LIST_TAG_OPEN in value:
        return value
    return f"{DEFAULT_RUN_LIST_TAG}[{value}]"


def normalize_run_list(entries: Iterable[str]) -> list[str]:
    """Normalize every entry of a run list, preserving order."""

    return [normalize_run_list_entry(entry) for entry in entries]


def validate_structured_document(
    value: object, key: str = "content"
) -> tuple[list[str], list[str]]:
    """Reject values that ``normalize_structured`` would collapse to ``NO_VALUE``."""

    warnings: list[str] = []
    errors: list[str] = []
    if not isinstance(value, str):
        errors.append(f"{key} must be a string containing a JSON object")
        return warnings, errors

    try:
        parsed = _loads(value)
    except (ValueError, RecursionError) as exc:
        errors.append(f"{key} is not valid JSON: {exc}")
        return warnings, errors

    if not isinstance(parsed, dict):
        errors.append(f"{key} must be a JSON object, got {_json_kind(parsed)}")
    return warnings, errors


def _parse_object(value: object) -> dict[str, object] | None:
    if not isinstance(value, str):
        return None
    try:
        parsed = _loads(value)
    except (ValueError, RecursionError):
        return None
    if not isinstance(parsed, dict):
        return None
    return parsed


def _loads(text: str) -> object:
    return json.loads(
        text,
        parse_float=_parse_number,
        parse_int=_parse_number,
        parse_constant=_reject_constant,
    )


def _parse_number(text: str) -> int | float:
    # Remote state carries every number as a double, integer literals included:
    # 1 and 1.0 are the same value and integers beyond 2**53 lose precision.
    number = float(text)
    if not math.isfinite(number):
        raise _NonFiniteNumber(f"number out of range: {text}")
    if number.is_integer():
        return int(number)
    return number


def _reject_constant(text: str) -> object:
    raise _NonFiniteNumber(f"unsupported constant: {text}")


def _dump_canonical(payload: dict[str, object]) -> str:
    return json.dumps(
        payload,
        sort_keys=True,
        separators=_CANONICAL_SEPARATORS,
        ensure_ascii=False,
    )


def _json_kind(value: object) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return type(value).__name__


__all__ = [
    "NO_VALUE",
    "StateNormalizer",
    "normalize_run_list",
    "normalize_run_list_entry",
    "normalize_structured",
    "validate_structured_document",
]
