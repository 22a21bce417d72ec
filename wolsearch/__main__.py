"""
Entry point for running wolsearch as a module: python -m wolsearch
"""

from wolsearch.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
