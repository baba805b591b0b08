"""Module entrypoint for ``python -m rover``.

All argument parsing and runtime setup happen in ``rover.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
