"""
Package entry point.

Allows running the application via:

    python -m auskema

This simply forwards execution to auskema.cli.main().
"""

from auskema.cli import main

if __name__ == "__main__":
    main()
