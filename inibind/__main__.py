"""Module entrypoint for running inibind as ``python -m inibind``."""

from __future__ import annotations

from inibind.cli import main


if __name__ == "__main__":
    main()
