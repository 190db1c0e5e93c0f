"""Module entrypoint for ``python -m lazyexplorer``.

Argument parsing and explorer setup happen in ``lazyexplorer.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
