"""Credential resolution for the provider client."""

from chef_provider.auth.credentials import (
    CredentialSource,
    CredentialSourceError,
    EnvLookup,
    FileReader,
    LocalFileReader,
    ResolvedCredential,
    resolve_credential,
)

__all__ = [
    "CredentialSource",
    "CredentialSourceError",
    "EnvLookup",
    "FileReader",
    "LocalFileReader",
    "ResolvedCredential",
    "resolve_credential",
]
