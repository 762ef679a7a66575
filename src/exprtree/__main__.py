"""
exprtree entry point.

Run with: python -m exprtree eval "1 + 2 * 3"
"""

from exprtree.cli import main

if __name__ == "__main__":
    main()
