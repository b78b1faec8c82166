#!/usr/bin/env python3
"""
Mockapic - mock HTTP response server

This is a convenience wrapper that calls the packaged CLI.
The actual implementation is in src/mockapic/cli.py

Usage:
    python mockapic-server.py serve --port 3333 --working-directory ./mocks

For more information, see README.md
"""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent / "src"))

from mockapic.cli import main

if __name__ == '__main__':
    main()
