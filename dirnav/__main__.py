"""Module entrypoint for ``python -m dirnav``.

All argument parsing and dispatch happen in ``dirnav.cli``.
"""

from .cli import main


if __name__ == "__main__":
    raise SystemExit(main())
