"""CLI entry point for errand.yaml module.

Usage:
    python -m errand.yaml [options] TASK [ARGS...]

Example:
    python -m errand.yaml build
    python -m errand.yaml --run lint test --parallel
    python -m errand.yaml --list 'build*'
"""

from .runner import main
import sys

if __name__ == '__main__':
    sys.exit(main())
