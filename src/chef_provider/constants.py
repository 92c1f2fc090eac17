"""Stable constants shared across the provider core."""

from __future__ import annotations

from typing import Final

# Attribute names recognized by the provider block.
ATTR_SERVER_URL: Final[str] = "server_url"
ATTR_CLIENT_NAME: Final[str] = "client_name"
ATTR_PRIVATE_KEY_PEM: Final[str] = "private_key_pem"
ATTR_KEY_MATERIAL: Final[str] = "key_material"
ATTR_ALLOW_UNVERIFIED_SSL: Final[str] = "allow_unverified_ssl"

# Environment variables consulted for defaults and credential material.
ENV_SERVER_URL: Final[str] = "CHEF_SERVER_URL"
ENV_CLIENT_NAME: Final[str] = "CHEF_CLIENT_NAME"
ENV_PRIVATE_KEY_FILE: Final[str] = "CHEF_PRIVATE_KEY_FILE"
ENV_KEY_MATERIAL: Final[str] = "CHEF_KEY_MATERIAL"

# Environment variables for the package's own logging.
ENV_LOG_LEVEL: Final[str] = "CHEF_PROVIDER_LOG_LEVEL"
ENV_LOG_FORMAT: Final[str] = "CHEF_PROVIDER_LOG_FORMAT"

# Fixed per-request timeout handed to the transport. Not user-configurable.
REQUEST_TIMEOUT_SECONDS: Final[float] = 10.0

# Canonical "no value" token for structured state that cannot be parsed.
NO_VALUE: Final[str] = "null"

# Run-list entries default to the recipe tag.
RUN_LIST_TAG_OPEN: Final[str] = "["
DEFAULT_RUN_LIST_TAG: Final[str] = "recipe"

PRIVATE_KEY_DEPRECATION: Final[str] = "Please use key_material instead"

__all__ = [
    "ATTR_ALLOW_UNVERIFIED_SSL",
    "ATTR_CLIENT_NAME",
    "ATTR_KEY_MATERIAL",
    "ATTR_PRIVATE_KEY_PEM",
    "ATTR_SERVER_URL",
    "DEFAULT_RUN_LIST_TAG",
    "ENV_CLIENT_NAME",
    "ENV_KEY_MATERIAL",
    "ENV_LOG_FORMAT",
    "ENV_LOG_LEVEL",
    "ENV_PRIVATE_KEY_FILE",
    "ENV_SERVER_URL",
    "NO_VALUE",
    "PRIVATE_KEY_DEPRECATION",
    "REQUEST_TIMEOUT_SECONDS",
    "RUN_LIST_TAG_OPEN",
]
