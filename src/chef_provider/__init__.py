"""
chef-provider — package root

File: src/chef_provider/__init__.py
Last updated: 2026-10-16

Purpose
- Reconciliation-support core of a Chef infrastructure provider: endpoint
  validation, client key resolution, state normalization and provider
  configuration assembly.

Functional requirements
- Must not have side effects at import time (no config loading, no logging init).
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
