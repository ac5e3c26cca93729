"""Module entrypoint for `python -m envgate`.

Delegates to the CLI implementation.
"""

from .cli import main


if __name__ == "__main__":
    main()
