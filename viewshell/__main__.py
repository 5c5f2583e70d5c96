"""Module entrypoint for ``python -m viewshell``."""

from .cli import main


if __name__ == "__main__":
    main()
