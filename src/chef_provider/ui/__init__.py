"""Command-line surface for chef-provider."""

from chef_provider.ui.cli import CLIError, build_parser, run_cli

__all__ = ["CLIError", "build_parser", "run_cli"]
