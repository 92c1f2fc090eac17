"""Canonicalization of values compared against recorded state."""

from chef_provider.state.normalize import (
    NO_VALUE,
    StateNormalizer,
    normalize_run_list,
    normalize_run_list_entry,
    normalize_structured,
    validate_structured_document,
)

__all__ = [
    "NO_VALUE",
    "StateNormalizer",
    "normalize_run_list",
    "normalize_run_list_entry",
    "normalize_structured",
    "validate_structured_document",
]
