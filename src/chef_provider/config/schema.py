"""
chef-provider — provider attribute schema and validation

File: src/chef_provider/config/schema.py
Last updated: 2026-10-16

Purpose
- Declare the provider block's attributes and validate raw values before they
  reach the credential resolver or the Chef server.

What should be included in this file
- Field declarations (type, required, env default, deprecation, sensitivity).
- Per-field validators returning ``(warnings, errors)``.
- Structured issues (field path + message + severity) and the aggregated error.

Functional requirements
- ``server_url`` must end with ``/``; it is later joined with relative paths.
- Deprecated fields validate but produce a warning.
- Unknown attributes and wrong types are errors.

Non-functional requirements
- Pure and deterministic; no network or filesystem access.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Final, Literal, TypeAlias

from chef_provider.constants import (
    ATTR_ALLOW_UNVERIFIED_SSL,
    ATTR_CLIENT_NAME,
    ATTR_KEY_MATERIAL,
    ATTR_PRIVATE_KEY_PEM,
    ATTR_SERVER_URL,
    ENV_CLIENT_NAME,
    ENV_SERVER_URL,
    PRIVATE_KEY_DEPRECATION,
)

FieldType: TypeAlias = Literal["string", "bool"]
IssueSeverity: TypeAlias = Literal["error", "warning"]
FieldValidator: TypeAlias = Callable[[object, str], tuple[list[str], list[str]]]


def validate_server_url(value: object, key: str = ATTR_SERVER_URL) -> tuple[list[str], list[str]]:
    """Check that the Chef server URL ends with a path separator.

    The transport joins this URL with resource-relative paths, so a missing
    trailing ``/`` would only surface as a malformed request much later.
    """

    warnings: list[str] = []
    errors: list[str] = []
    if not isinstance(value, str):
        errors.append(f"{key} must be a string, got {type(value).__name__}")
        return warnings, errors
    if not value.endswith("/"):
        errors.append(f"Chef Server URL {value} must end with a slash")
    return warnings, errors


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """Declaration of one provider attribute."""

    name: str
    type: FieldType
    description: str
    required: bool = False
    env_default: str | None = None
    deprecated: str | None = None
    sensitive: bool = False
    validator: FieldValidator | None = None


PROVIDER_FIELDS: Final[tuple[FieldSpec, ...]] = (
    FieldSpec(
        name=ATTR_SERVER_URL,
        type="string",
        required=True,
        env_default=ENV_SERVER_URL,
        description="URL of the root of the target Chef server or organization.",
        validator=validate_server_url,
    ),
    FieldSpec(
        name=ATTR_CLIENT_NAME,
        type="string",
        required=True,
        env_default=ENV_CLIENT_NAME,
        description="Name of a registered client within the Chef server.",
    ),
    FieldSpec(
        name=ATTR_PRIVATE_KEY_PEM,
        type="string",
        deprecated=PRIVATE_KEY_DEPRECATION,
        sensitive=True,
        description="PEM-formatted private key for client authentication.",
    ),
    FieldSpec(
        name=ATTR_KEY_MATERIAL,
        type="string",
        sensitive=True,
        description="Private key material for client authentication.",
    ),
    FieldSpec(
        name=ATTR_ALLOW_UNVERIFIED_SSL,
        type="bool",
        description="If set, the Chef client will permit unverifiable SSL certificates.",
    ),
)

FIELDS_BY_NAME: Final[dict[str, FieldSpec]] = {spec.name: spec for spec in PROVIDER_FIELDS}


@dataclass(frozen=True, slots=True)
class ConfigValidationIssue:
    """Single structured validation finding."""

    path: str
    message: str
    severity: IssueSeverity = "error"


@dataclass(frozen=True, slots=True)
class ConfigValidationResult:
    """Validation result with normalized attributes when no errors were found."""

    attributes: dict[str, Any] | None
    issues: tuple[ConfigValidationIssue, ...]

    @property
    def errors(self) -> tuple[ConfigValidationIssue, ...]:
        return tuple(item for item in self.issues if item.severity == "error")

    @property
    def warnings(self) -> tuple[ConfigValidationIssue, ...]:
        return tuple(item for item in self.issues if item.severity == "warning")

    @property
    def is_valid(self) -> bool:
        return self.attributes is not None and not self.errors


class ConfigValidationError(ValueError):
    """Raised when provider attributes fail validation."""

    def __init__(self, issues: Sequence[ConfigValidationIssue]) -> None:
        self.issues = tuple(item for item in issues if item.severity == "error")
        if not self.issues:
            rendered = "unknown validation failure"
        else:
            rendered = "\n".join(f"- {item.path}: {item.message}" for item in self.issues)
        super().__init__(f"invalid provider configuration:\n{rendered}")


class _IssueCollector:
    __slots__ = ("_items",)

    def __init__(self) -> None:
        self._items: list[ConfigValidationIssue] = []

    def add(self, path: str, message: str, severity: IssueSeverity = "error") -> None:
        self._items.append(ConfigValidationIssue(path=path, message=message, severity=severity))

    def extend(self, path: str, warnings: Sequence[str], errors: Sequence[str]) -> None:
        for message in warnings:
            self.add(path, message, "warning")
        for message in errors:
            self.add(path, message)

    def items(self) -> tuple[ConfigValidationIssue, ...]:
        return tuple(self._items)

    @property
    def has_errors(self) -> bool:
        return any(item.severity == "error" for item in self._items)


def validate_provider_attributes(raw: Mapping[str, object] | object) -> ConfigValidationResult:
    """Validate a raw attribute mapping against ``PROVIDER_FIELDS``.

    Absent attributes are represented by a missing key or ``None``. The returned
    ``attributes`` only holds declared fields that were present.
    """

    issues = _IssueCollector()
    if not isinstance(raw, Mapping):
        issues.add("<root>", f"expected object, got {type(raw).__name__}")
        return ConfigValidationResult(attributes=None, issues=issues.items())

    for key in sorted(raw, key=str):
        if not isinstance(key, str):
            issues.add("<root>", f"attribute name must be string, got {type(key).__name__}")
        elif key not in FIELDS_BY_NAME:
            issues.add(key, "unknown field")

    normalized: dict[str, Any] = {}
    for spec in PROVIDER_FIELDS:
        value = raw.get(spec.name)
        if value is None:
            if spec.required:
                issues.add(spec.name, "missing required field")
            continue

        parsed = _check_type(spec, value, issues)
        if parsed is None:
            continue

        if spec.validator is not None:
            warnings, errors = spec.validator(parsed, spec.name)
            issues.extend(spec.name, warnings, errors)

        if spec.deprecated is not None and parsed != "":
            issues.add(spec.name, spec.deprecated, "warning")

        normalized[spec.name] = parsed

    if issues.has_errors:
        return ConfigValidationResult(attributes=None, issues=issues.items())
    return ConfigValidationResult(attributes=normalized, issues=issues.items())


def assert_valid_attributes(raw: Mapping[str, object] | object) -> ConfigValidationResult:
    """Validate attributes and raise ``ConfigValidationError`` on any error."""

    result = validate_provider_attributes(raw)
    if not result.is_valid:
        raise ConfigValidationError(result.issues)
    return result


def _check_type(spec: FieldSpec, value: object, issues: _IssueCollector) -> object | None:
    if spec.type == "bool":
        if isinstance(value, bool):
            return value
        issues.add(spec.name, f"expected boolean, got {type(value).__name__}")
        return None

    if not isinstance(value, str):
        issues.add(spec.name, f"expected string, got {type(value).__name__}")
        return None
    if spec.required and not value.strip():
        issues.add(spec.name, "must not be empty")
        return None
    return value


__all__ = [
    "FIELDS_BY_NAME",
    "PROVIDER_FIELDS",
    "ConfigValidationError",
    "ConfigValidationIssue",
    "ConfigValidationResult",
    "FieldSpec",
    "FieldType",
    "FieldValidator",
    "IssueSeverity",
    "assert_valid_attributes",
    "validate_provider_attributes",
    "validate_server_url",
]
