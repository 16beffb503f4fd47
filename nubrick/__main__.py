"""
Module entry-point that makes the package runnable with

    python -m nubrick

The behaviour is identical to the *nubrick-cli* console script.
"""

from nubrick.cli import main

if __name__ == "__main__":  # pragma: no cover
    main()
