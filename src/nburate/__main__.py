# src/nburate/__main__.py
"""Module entry point: ``python -m nburate``."""

from nburate.app import main

if __name__ == "__main__":
    main()
