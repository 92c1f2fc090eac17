"""Client key resolution: pick exactly one credential from the configured sources.

File: src/chef_provider/auth/credentials.py

Pure precedence logic plus one scoped file read. Environment and filesystem
access are injected so callers (and tests) never have to touch process state.

Precedence, highest first:
1. ``private_key_pem`` (deprecated field)
2. ``key_material``
3. only when neither field is set: the file named by ``CHEF_PRIVATE_KEY_FILE``,
   then the literal value of ``CHEF_KEY_MATERIAL``.
"""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

import structlog

from chef_provider.constants import ENV_KEY_MATERIAL, ENV_PRIVATE_KEY_FILE

# ---------------------------------------------------------------------------
# Capabilities
# ---------------------------------------------------------------------------


class EnvLookup(Protocol):
    """Read access to environment variables. ``os.environ`` satisfies this."""

    def get(self, key: str, default: None = None, /) -> str | None: ...


class FileReader(Protocol):
    """Read a whole text file; raises ``OSError`` or ``UnicodeDecodeError`` when it cannot."""

    def read_text(self, path: str) -> str: ...


class LocalFileReader:
    """``FileReader`` backed by the local filesystem."""

    def read_text(self, path: str) -> str:
        return Path(path).expanduser().read_text(encoding="utf-8")


# ---------------------------------------------------------------------------
# Results and errors
# ---------------------------------------------------------------------------


class CredentialSource(enum.Enum):
    """Where the effective credential came from."""

    DEPRECATED_FIELD = "private_key_pem"
    EXPLICIT_FIELD = "key_material"
    ENV_FILE = "env_file"
    ENV_VALUE = "env_value"
    NONE = "none"


@dataclass(frozen=True, slots=True)
class ResolvedCredential:
    """The single effective credential plus its provenance."""

    value: str = field(repr=False)
    source: CredentialSource

    @property
    def is_empty(self) -> bool:
        return not self.value


class CredentialSourceError(RuntimeError):
    """A declared credential source exists but could not be read."""

    def __init__(self, env_var: str, path: str, reason: str) -> None:
        self.env_var = env_var
        self.path = path
        super().__init__(f"unable to read client key from {env_var}={path}: {reason}")


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


def resolve_credential(
    key_material: str | None,
    private_key_pem: str | None,
    *,
    env: EnvLookup | None = None,
    files: FileReader | None = None,
    key_file_var: str = ENV_PRIVATE_KEY_FILE,
    key_material_var: str = ENV_KEY_MATERIAL,
    logger: Any | None = None,
) -> ResolvedCredential:
    """Return the effective client key following the fixed precedence order.

    Raises ``CredentialSourceError`` when ``key_file_var`` names a file that
    cannot be read; a broken source is never treated as an absent one.
    """

    log = logger if logger is not None else structlog.get_logger(__name__)
    resolved = _resolve(
        key_material,
        private_key_pem,
        env=env if env is not None else os.environ,
        files=files if files is not None else LocalFileReader(),
        key_file_var=key_file_var,
        key_material_var=key_material_var,
    )
    log.debug(
        "credential_resolved",
        source=resolved.source.value,
        empty=resolved.is_empty,
    )
    return resolved


def _resolve(
    key_material: str | None,
    private_key_pem: str | None,
    *,
    env: EnvLookup,
    files: FileReader,
    key_file_var: str,
    key_material_var: str,
) -> ResolvedCredential:
    if private_key_pem:
        return ResolvedCredential(private_key_pem, CredentialSource.DEPRECATED_FIELD)
    if key_material:
        return ResolvedCredential(key_material, CredentialSource.EXPLICIT_FIELD)

    key_path = env.get(key_file_var)
    if key_path:
        try:
            contents = files.read_text(key_path)
        except (OSError, UnicodeDecodeError) as exc:
            raise CredentialSourceError(key_file_var, key_path, str(exc)) from exc
        if contents:
            return ResolvedCredential(contents, CredentialSource.ENV_FILE)

    env_value = env.get(key_material_var)
    if env_value:
        return ResolvedCredential(env_value, CredentialSource.ENV_VALUE)

    return ResolvedCredential("", CredentialSource.NONE)


__all__ = [
    "CredentialSource",
    "CredentialSourceError",
    "EnvLookup",
    "FileReader",
    "LocalFileReader",
    "ResolvedCredential",
    "resolve_credential",
]
