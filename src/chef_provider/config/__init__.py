"""
chef-provider config package public API.

File: src/chef_provider/config/__init__.py
Last updated: 2026-10-16

Purpose
- Export attribute validation, loading and configuration assembly entrypoints.

Non-functional requirements
- Keep import-time surface small and free of side effects.
"""

from chef_provider.config.assembler import (
    ProviderConfig,
    assemble_config,
    build_config,
    dump_effective_config,
    effective_config,
)
from chef_provider.config.loader import (
    PROVIDER_TABLE,
    AttributeSet,
    ConfigLoadError,
    MappingAttributeSet,
    ProviderAttributes,
    as_attribute_set,
    env_defaults,
    load_attributes_file,
    load_provider_attributes,
    translate_attributes,
)
from chef_provider.config.schema import (
    FIELDS_BY_NAME,
    PROVIDER_FIELDS,
    ConfigValidationError,
    ConfigValidationIssue,
    ConfigValidationResult,
    FieldSpec,
    assert_valid_attributes,
    validate_provider_attributes,
    validate_server_url,
)

__all__ = [
    "FIELDS_BY_NAME",
    "PROVIDER_FIELDS",
    "PROVIDER_TABLE",
    "AttributeSet",
    "ConfigLoadError",
    "ConfigValidationError",
    "ConfigValidationIssue",
    "ConfigValidationResult",
    "FieldSpec",
    "MappingAttributeSet",
    "ProviderAttributes",
    "ProviderConfig",
    "as_attribute_set",
    "assemble_config",
    "assert_valid_attributes",
    "build_config",
    "dump_effective_config",
    "effective_config",
    "env_defaults",
    "load_attributes_file",
    "load_provider_attributes",
    "translate_attributes",
    "validate_provider_attributes",
    "validate_server_url",
]
