#!/usr/bin/env python3
"""
Level Editor command-line launcher
"""

import sys

from level_editor.cli import main

if __name__ == "__main__":
    sys.exit(main())
