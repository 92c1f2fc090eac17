"""
chef-provider — public security utilities

File: src/chef_provider/security/__init__.py
Last updated: 2026-10-16

Purpose
- Redaction helpers shared by logging, config dumps and the CLI.
"""

from chef_provider.security.redaction import (
    DEFAULT_REDACTION_CONFIG,
    DEFAULT_SENSITIVE_KEY_DENYLIST,
    REDACTED_VALUE,
    RedactionConfig,
    is_sensitive_key,
    redact_structure,
    redact_text,
)

__all__ = [
    "DEFAULT_REDACTION_CONFIG",
    "DEFAULT_SENSITIVE_KEY_DENYLIST",
    "REDACTED_VALUE",
    "RedactionConfig",
    "is_sensitive_key",
    "redact_structure",
    "redact_text",
]
