"""Package entry point for ``python -m nationscript``."""

from nationscript.cli import main

if __name__ == "__main__":
    main()
