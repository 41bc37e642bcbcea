"""Module entrypoint for ``python -m pathbundle``.

All argument parsing and logging setup happen in ``pathbundle.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
