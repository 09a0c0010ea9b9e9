"""Module entrypoint for running modsplit as ``python -m modsplit``."""

from __future__ import annotations

from modsplit.cli import main


if __name__ == "__main__":
    main()
