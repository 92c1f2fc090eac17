"""Provider entrypoint: the surface the host framework wires into.

``configure_provider`` builds the configuration and hands it to the transport's
client factory. ``STATE_NORMALIZERS`` names the normalizers the diff engine
calls for fields whose recorded value must be canonical.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Final, TypeVar

from chef_provider.auth.credentials import EnvLookup, FileReader
from chef_provider.config.assembler import ProviderConfig, build_config
from chef_provider.config.loader import AttributeSet
from chef_provider.config.schema import PROVIDER_FIELDS, FieldSpec
from chef_provider.state.normalize import (
    StateNormalizer,
    normalize_run_list_entry,
    normalize_structured,
)

ClientT = TypeVar("ClientT")
ClientFactory = Callable[[ProviderConfig], ClientT]

STATE_NORMALIZERS: Final[Mapping[str, StateNormalizer]] = {
    "structured": normalize_structured,
    "run_list_entry": normalize_run_list_entry,
}


def provider_schema() -> tuple[FieldSpec, ...]:
    """Return the provider block's field declarations."""
    return PROVIDER_FIELDS


def configure_provider(
    attrs: AttributeSet | Mapping[str, object],
    client_factory: ClientFactory[ClientT],
    *,
    env: EnvLookup | None = None,
    files: FileReader | None = None,
    logger: Any | None = None,
) -> ClientT:
    """Build the configuration and return the client produced from it.

    The factory is only called once the configuration is complete; any
    validation or credential error propagates before it runs.
    """

    config = build_config(attrs, env=env, files=files, logger=logger)
    return client_factory(config)


__all__ = [
    "STATE_NORMALIZERS",
    "ClientFactory",
    "configure_provider",
    "provider_schema",
]
