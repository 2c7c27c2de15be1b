"""
Package entry point.

Allows:
  python -m pbn_rotator ...

Delegates to the orchestrator CLI.
"""

from __future__ import annotations

import sys

from .orchestrator import main

if __name__ == "__main__":
    sys.exit(main())
