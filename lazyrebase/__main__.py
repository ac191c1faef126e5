"""Module entrypoint for ``python -m lazyrebase``.

All argument parsing and runtime setup happen in ``lazyrebase.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
