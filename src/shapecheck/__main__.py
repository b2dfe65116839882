"""Module entrypoint for ``python -m shapecheck``."""

from __future__ import annotations

from shapecheck.main import cli_entrypoint

if __name__ == "__main__":
    raise SystemExit(cli_entrypoint())
