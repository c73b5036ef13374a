"""
Package entry point.

Allows running the scraper via:

    python -m schoolsoft lunch

This simply forwards execution to schoolsoft.cli.main().
"""

from schoolsoft.cli import main

if __name__ == "__main__":
    main()
