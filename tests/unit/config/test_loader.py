"""
chef-provider — unit tests for attribute loading and translation

File: tests/unit/config/test_loader.py
Last updated: 2026-10-16

Purpose
- Validate attribute translation from host attribute sets and standalone loading.

What this test file should cover
- ``get_ok`` zero-value semantics of the mapping adapter.
- Typed translation and aggregated validation errors.
- Precedence: CLI > file > env defaults; TOML errors; boolean coercion.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from chef_provider.config.loader import (
    ConfigLoadError,
    MappingAttributeSet,
    ProviderAttributes,
    as_attribute_set,
    env_defaults,
    load_attributes_file,
    load_provider_attributes,
    translate_attributes,
)
from chef_provider.config.schema import ConfigValidationError


def _write_config(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


class _RecordingAttributeSet:
    """Host-style attribute set that records which names were requested."""

    def __init__(self, values: dict[str, object]) -> None:
        self.values = values
        self.requested: list[str] = []

    def get(self, name: str) -> object:
        return self.values.get(name)

    def get_ok(self, name: str) -> tuple[object, bool]:
        self.requested.append(name)
        value = self.values.get(name)
        return value, bool(value)


def test_mapping_attribute_set_zero_values_are_not_ok() -> None:
    attrs = MappingAttributeSet({"a": "", "b": False, "c": None, "d": "x", "e": True})

    assert attrs.get_ok("a") == ("", False)
    assert attrs.get_ok("b") == (False, False)
    assert attrs.get_ok("c") == (None, False)
    assert attrs.get_ok("missing") == (None, False)
    assert attrs.get_ok("d") == ("x", True)
    assert attrs.get_ok("e") == (True, True)
    assert attrs.get("d") == "x"


def test_as_attribute_set_passes_through_host_sets() -> None:
    host = _RecordingAttributeSet({})
    assert as_attribute_set(host) is host
    assert isinstance(as_attribute_set({}), MappingAttributeSet)


def test_translate_attributes_returns_typed_view() -> None:
    attrs, warnings = translate_attributes(
        {
            "server_url": "https://chef.example.com/",
            "client_name": "terraform",
            "key_material": "KEY",
            "allow_unverified_ssl": True,
        }
    )

    assert attrs == ProviderAttributes(
        server_url="https://chef.example.com/",
        client_name="terraform",
        key_material="KEY",
        allow_unverified_ssl=True,
    )
    assert warnings == ()
    assert "KEY" not in repr(attrs)


def test_translate_attributes_reads_every_declared_field_from_host_set() -> None:
    host = _RecordingAttributeSet(
        {"server_url": "https://chef.example.com/", "client_name": "terraform"}
    )

    attrs, _ = translate_attributes(host)

    assert attrs.private_key_pem is None
    assert attrs.key_material is None
    assert attrs.allow_unverified_ssl is False
    assert host.requested == [
        "server_url",
        "client_name",
        "private_key_pem",
        "key_material",
        "allow_unverified_ssl",
    ]


def test_translate_attributes_surfaces_deprecation_warning() -> None:
    _, warnings = translate_attributes(
        {
            "server_url": "https://chef.example.com/",
            "client_name": "terraform",
            "private_key_pem": "PEM",
        }
    )

    assert [item.path for item in warnings] == ["private_key_pem"]


def test_translate_attributes_raises_with_every_error() -> None:
    with pytest.raises(ConfigValidationError) as excinfo:
        translate_attributes({"server_url": "https://chef.example.com", "allow_unverified_ssl": 1})

    paths = sorted(item.path for item in excinfo.value.issues)
    assert paths == ["allow_unverified_ssl", "client_name", "server_url"]


def test_translate_attributes_rejects_unknown_mapping_keys() -> None:
    with pytest.raises(ConfigValidationError) as excinfo:
        translate_attributes(
            {
                "server_url": "https://chef.example.com/",
                "client_name": "terraform",
                "organisation": "acme",
            }
        )

    assert [(item.path, item.message) for item in excinfo.value.issues] == [
        ("organisation", "unknown field")
    ]


def test_loader_precedence_env_file_cli(tmp_path: Path) -> None:
    config_path = _write_config(
        tmp_path / "provider.toml",
        """
[provider]
server_url = "https://file.example.com/"
client_name = "from-file"
""".strip(),
    )
    environ = {
        "CHEF_SERVER_URL": "https://env.example.com/",
        "CHEF_CLIENT_NAME": "from-env",
    }

    env_loaded = load_provider_attributes(environ=environ)
    file_loaded = load_provider_attributes(config_path, environ=environ)
    cli_loaded = load_provider_attributes(
        config_path,
        environ=environ,
        cli_overrides={"client_name": "from-cli", "server_url": None},
    )

    assert env_loaded == {
        "server_url": "https://env.example.com/",
        "client_name": "from-env",
    }
    assert file_loaded["client_name"] == "from-file"
    assert cli_loaded == {
        "server_url": "https://file.example.com/",
        "client_name": "from-cli",
    }


def test_env_defaults_skip_blank_and_unrelated_values() -> None:
    defaults = env_defaults(
        {
            "CHEF_SERVER_URL": "  ",
            "CHEF_CLIENT_NAME": " terraform ",
            "CHEF_KEY_MATERIAL": "not-an-attribute-default",
        }
    )

    assert defaults == {"client_name": "terraform"}


def test_file_string_booleans_are_coerced(tmp_path: Path) -> None:
    config_path = _write_config(
        tmp_path / "provider.toml",
        '[provider]\nallow_unverified_ssl = "yes"\n',
    )

    assert load_attributes_file(config_path) == {"allow_unverified_ssl": True}


def test_file_native_booleans_are_kept(tmp_path: Path) -> None:
    config_path = _write_config(
        tmp_path / "provider.toml",
        "[provider]\nallow_unverified_ssl = false\n",
    )

    assert load_attributes_file(config_path) == {"allow_unverified_ssl": False}


def test_file_invalid_boolean_string(tmp_path: Path) -> None:
    config_path = _write_config(
        tmp_path / "provider.toml",
        '[provider]\nallow_unverified_ssl = "sometimes"\n',
    )

    with pytest.raises(ConfigLoadError, match="allow_unverified_ssl must be a boolean"):
        load_attributes_file(config_path)


def test_file_without_provider_table_is_empty(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path / "provider.toml", 'title = "unrelated"\n')
    assert load_attributes_file(config_path) == {}


def test_provider_key_must_be_a_table(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path / "provider.toml", 'provider = "chef"\n')

    with pytest.raises(ConfigLoadError, match=r"\[provider\] must be a table"):
        load_attributes_file(config_path)


def test_missing_file_raises_config_load_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigLoadError, match="config file not found"):
        load_attributes_file(tmp_path / "missing.toml")


def test_invalid_toml_raises_config_load_error(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path / "provider.toml", "[provider\nserver_url = \n")

    with pytest.raises(ConfigLoadError, match="invalid TOML"):
        load_attributes_file(config_path)
