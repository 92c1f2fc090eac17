"""
chef-provider — attribute loading and translation

File: src/chef_provider/config/loader.py
Last updated: 2026-10-16

Purpose
- Turn host-supplied, dynamically typed attributes into ``ProviderAttributes``.
- Load provider attributes for standalone use from TOML, env defaults and CLI flags.

What should be included in this file
- ``AttributeSet`` protocol (``get`` / ``get_ok``) and a mapping-backed adapter.
- ``translate_attributes``: the only place raw attribute values are type-checked.
- Precedence logic for standalone loading: CLI > file > env defaults.
- TOML loading via ``tomllib``.

Functional requirements
- Type or validation failures raise ``ConfigValidationError`` with every issue.
- Unreadable or malformed attribute files raise ``ConfigLoadError``.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Final, Protocol

from chef_provider.config.schema import (
    FIELDS_BY_NAME,
    PROVIDER_FIELDS,
    ConfigValidationError,
    ConfigValidationIssue,
    FieldSpec,
    validate_provider_attributes,
)
from chef_provider.constants import (
    ATTR_ALLOW_UNVERIFIED_SSL,
    ATTR_CLIENT_NAME,
    ATTR_KEY_MATERIAL,
    ATTR_PRIVATE_KEY_PEM,
    ATTR_SERVER_URL,
)

PROVIDER_TABLE: Final[str] = "provider"

_BOOLEAN_TRUE: Final[frozenset[str]] = frozenset({"1", "true", "t", "yes", "y", "on"})
_BOOLEAN_FALSE: Final[frozenset[str]] = frozenset({"0", "false", "f", "no", "n", "off"})


class ConfigLoadError(ValueError):
    """Raised when attributes cannot be loaded or a value cannot be coerced."""


class AttributeSet(Protocol):
    """Attribute lookup supplied by the host framework."""

    def get(self, name: str) -> object: ...

    def get_ok(self, name: str) -> tuple[object, bool]: ...


class MappingAttributeSet:
    """``AttributeSet`` over a plain mapping.

    ``get_ok`` reports ``False`` for absent keys and for zero values (``None``,
    ``""``, ``False``), matching how the host framework treats unset fields.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, object]) -> None:
        self._values = dict(values)

    def get(self, name: str) -> object:
        return self._values.get(name)

    def get_ok(self, name: str) -> tuple[object, bool]:
        value = self._values.get(name)
        return value, value is not None and value != "" and value is not False


@dataclass(frozen=True, slots=True)
class ProviderAttributes:
    """Typed view of the provider block after validation."""

    server_url: str
    client_name: str
    private_key_pem: str | None = field(default=None, repr=False)
    key_material: str | None = field(default=None, repr=False)
    allow_unverified_ssl: bool = False


def as_attribute_set(attrs: AttributeSet | Mapping[str, object]) -> AttributeSet:
    """Wrap plain mappings so callers can pass either form."""

    if isinstance(attrs, Mapping):
        return MappingAttributeSet(attrs)
    return attrs


def translate_attributes(
    attrs: AttributeSet | Mapping[str, object],
) -> tuple[ProviderAttributes, tuple[ConfigValidationIssue, ...]]:
    """Validate host attributes and return them typed, plus any warnings.

    Raises ``ConfigValidationError`` listing every error when validation fails.
    """

    attribute_set = as_attribute_set(attrs)
    names = [spec.name for spec in PROVIDER_FIELDS]
    if isinstance(attrs, Mapping):
        # Undeclared keys are kept so validation reports them as unknown.
        names.extend(sorted((key for key in attrs if key not in FIELDS_BY_NAME), key=str))

    raw: dict[str, object] = {}
    for name in names:
        value, ok = attribute_set.get_ok(name)
        if ok:
            raw[name] = value

    result = validate_provider_attributes(raw)
    if result.attributes is None or result.errors:
        raise ConfigValidationError(result.issues)

    values = result.attributes
    typed = ProviderAttributes(
        server_url=values[ATTR_SERVER_URL],
        client_name=values[ATTR_CLIENT_NAME],
        private_key_pem=values.get(ATTR_PRIVATE_KEY_PEM),
        key_material=values.get(ATTR_KEY_MATERIAL),
        allow_unverified_ssl=bool(values.get(ATTR_ALLOW_UNVERIFIED_SSL, False)),
    )
    return typed, result.warnings


def load_provider_attributes(
    config_path: str | Path | None = None,
    *,
    cli_overrides: Mapping[str, object] | None = None,
    environ: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Load raw provider attributes with precedence: CLI > file > env defaults.

    The result is not validated; pass it to ``build_config`` or
    ``validate_provider_attributes``. ``None`` CLI values are ignored.
    """

    env_map = dict(os.environ if environ is None else environ)
    cli_map = dict(cli_overrides or {})
    merged = env_defaults(env_map)

    if config_path is not None:
        merged.update(load_attributes_file(config_path))

    for key in sorted(cli_map):
        value = cli_map[key]
        if value is not None:
            merged[key] = value

    return merged


def load_attributes_file(path: str | Path) -> dict[str, Any]:
    """Read the ``[provider]`` table from a TOML file."""

    resolved = Path(path).expanduser().resolve()
    if not resolved.exists():
        raise ConfigLoadError(f"config file not found: {resolved}")

    try:
        with resolved.open("rb") as handle:
            parsed = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigLoadError(f"invalid TOML in {resolved}: {exc}") from exc
    except OSError as exc:
        raise ConfigLoadError(f"unable to read config file {resolved}: {exc}") from exc

    table = parsed.get(PROVIDER_TABLE, {})
    if not isinstance(table, dict):
        raise ConfigLoadError(f"[{PROVIDER_TABLE}] must be a table: {resolved}")

    return {key: _coerce_file_value(key, value, resolved) for key, value in table.items()}


def env_defaults(environ: Mapping[str, str]) -> dict[str, Any]:
    """Return attribute defaults taken from the environment."""

    defaults: dict[str, Any] = {}
    for spec in PROVIDER_FIELDS:
        if spec.env_default is None:
            continue
        raw = environ.get(spec.env_default)
        if raw is None or not raw.strip():
            continue
        defaults[spec.name] = _coerce_text(raw.strip(), spec, source=spec.env_default)
    return defaults


def _coerce_file_value(key: str, value: object, path: Path) -> object:
    spec = FIELDS_BY_NAME.get(key)
    if spec is None or not isinstance(value, str):
        return value
    return _coerce_text(value, spec, source=str(path))


def _coerce_text(value: str, spec: FieldSpec, *, source: str) -> object:
    if spec.type != "bool":
        return value

    lowered = value.strip().lower()
    if lowered in _BOOLEAN_TRUE:
        return True
    if lowered in _BOOLEAN_FALSE:
        return False
    raise ConfigLoadError(
        f"{source} -> {spec.name} must be a boolean (true/false/1/0/yes/no/on/off)"
    )


__all__ = [
    "PROVIDER_TABLE",
    "AttributeSet",
    "ConfigLoadError",
    "MappingAttributeSet",
    "ProviderAttributes",
    "as_attribute_set",
    "env_defaults",
    "load_attributes_file",
    "load_provider_attributes",
    "translate_attributes",
]
