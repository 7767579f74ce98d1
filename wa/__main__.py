"""Module entrypoint for `python -m wa`."""

from wa.cli import main

if __name__ == "__main__":
    main()
