#!/usr/bin/env python
"""Entry point for Radio Record TUI"""

import os
import sys

# Add parent directory to path
_script_dir = os.path.dirname(os.path.abspath(__file__))
_parent_dir = os.path.dirname(_script_dir)
if _parent_dir not in sys.path:
    sys.path.insert(0, _parent_dir)

from record_tui.cli import cli

if __name__ == "__main__":
    cli()
