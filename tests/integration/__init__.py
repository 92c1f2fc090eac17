"""
chef-provider — integration test package

File: tests/integration/__init__.py
Last updated: 2026-10-16

Purpose
- Test package marker file for subprocess-level CLI contracts.
"""
