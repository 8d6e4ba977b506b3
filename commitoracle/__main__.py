"""
commitoracle CLI entry point.

Usage:
    python -m commitoracle hash <secret>
    python -m commitoracle guess <id> <candidate>
"""

import sys
from .cli import main

if __name__ == "__main__":
    sys.exit(main())
