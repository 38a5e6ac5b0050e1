"""CLI entry point for environment inspection.

Usage:
    python -m tinyenv KEY [KEY ...]
    python -m tinyenv KEY --check
    python -m tinyenv KEY --json
"""

from .introspection import main

if __name__ == "__main__":
    main()
