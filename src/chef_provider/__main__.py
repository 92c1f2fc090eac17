"""Module entrypoint for ``python -m chef_provider``."""

from __future__ import annotations

from chef_provider.main import cli_entrypoint

if __name__ == "__main__":
    raise SystemExit(cli_entrypoint())
