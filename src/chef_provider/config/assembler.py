"""
chef-provider — provider configuration assembly

File: src/chef_provider/config/assembler.py
Last updated: 2026-10-16

Purpose
- Compose validated attributes and the resolved credential into one immutable
  ``ProviderConfig`` for the transport.

Functional requirements
- Fail closed: any validation or credential error propagates and no partial
  configuration is returned.
- The request timeout is fixed and not user-configurable.
- The credential never appears in ``repr``, dumps or log events.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

import structlog

from chef_provider.auth.credentials import (
    EnvLookup,
    FileReader,
    ResolvedCredential,
    resolve_credential,
)
from chef_provider.config.loader import AttributeSet, ProviderAttributes, translate_attributes
from chef_provider.config.schema import ConfigValidationIssue
from chef_provider.constants import REQUEST_TIMEOUT_SECONDS
from chef_provider.security.redaction import redact_structure


@dataclass(frozen=True, slots=True)
class ProviderConfig:
    """Connection settings handed by reference to the transport."""

    server_url: str
    client_name: str
    credential: ResolvedCredential = field(repr=False)
    allow_unverified_ssl: bool = False
    timeout_seconds: float = field(default=REQUEST_TIMEOUT_SECONDS, init=False)

    @property
    def key(self) -> str:
        return self.credential.value

    @property
    def verify_ssl(self) -> bool:
        return not self.allow_unverified_ssl

    def to_dict(self) -> dict[str, Any]:
        return {
            "server_url": self.server_url,
            "client_name": self.client_name,
            "key": self.credential.value,
            "key_source": self.credential.source.value,
            "allow_unverified_ssl": self.allow_unverified_ssl,
            "timeout_seconds": self.timeout_seconds,
        }


def build_config(
    attrs: AttributeSet | Mapping[str, object],
    *,
    env: EnvLookup | None = None,
    files: FileReader | None = None,
    logger: Any | None = None,
) -> ProviderConfig:
    """Validate ``attrs``, resolve the client key and return the configuration.

    Raises ``ConfigValidationError`` for invalid attributes and
    ``CredentialSourceError`` when a configured key file cannot be read.
    """

    attributes, warnings = translate_attributes(attrs)
    return assemble_config(attributes, warnings, env=env, files=files, logger=logger)


def assemble_config(
    attributes: ProviderAttributes,
    warnings: Sequence[ConfigValidationIssue] = (),
    *,
    env: EnvLookup | None = None,
    files: FileReader | None = None,
    logger: Any | None = None,
) -> ProviderConfig:
    """Resolve the client key for already-validated ``attributes``.

    ``warnings`` are the non-fatal issues from validation; each one is logged.
    Raises ``CredentialSourceError`` when a configured key file cannot be read.
    """

    log = logger if logger is not None else structlog.get_logger(__name__)

    for issue in warnings:
        log.warning("provider_attribute_warning", attribute=issue.path, detail=issue.message)

    credential = resolve_credential(
        attributes.key_material,
        attributes.private_key_pem,
        env=env,
        files=files,
        logger=log,
    )

    config = ProviderConfig(
        server_url=attributes.server_url,
        client_name=attributes.client_name,
        credential=credential,
        allow_unverified_ssl=attributes.allow_unverified_ssl,
    )
    log.info(
        "provider_config_built",
        server_url=config.server_url,
        client_name=config.client_name,
        key_source=credential.source.value,
        allow_unverified_ssl=config.allow_unverified_ssl,
        timeout_seconds=config.timeout_seconds,
    )
    return config


def effective_config(config: ProviderConfig) -> dict[str, Any]:
    """Return a redacted representation suitable for logging or display."""

    redacted = redact_structure(config.to_dict())
    return dict(redacted) if isinstance(redacted, Mapping) else {}


def dump_effective_config(config: ProviderConfig) -> str:
    """Return deterministic JSON dump of the redacted configuration."""

    return json.dumps(
        effective_config(config), sort_keys=True, separators=(",", ":"), ensure_ascii=False
    )


__all__ = [
    "ProviderConfig",
    "assemble_config",
    "build_config",
    "dump_effective_config",
    "effective_config",
]
