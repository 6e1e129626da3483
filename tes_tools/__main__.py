"""Module entry point: python -m tes_tools ..."""

from __future__ import annotations

from tes_tools.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
