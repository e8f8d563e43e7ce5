#!/usr/bin/env python3
"""
List experiments of a project.

Same as the installed ``explister-ls`` command, runnable from a checkout.

Usage:
    python scripts/list_experiments.py -R path/to/project
    python scripts/list_experiments.py -R path/to/project --json
    python scripts/list_experiments.py --config explister.yaml --sort val_loss
"""

import sys
from pathlib import Path

# Add parent directory to path for local development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from explister.cli import main


if __name__ == "__main__":
    sys.exit(main())
