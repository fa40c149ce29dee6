#!/usr/bin/env python3
"""
Call the Coinspot REST API from the command line.

Required environment variables (or --config config.yaml):
    COINSPOT_API_KEY      - Coinspot API key
    COINSPOT_API_SECRET   - Coinspot API secret
    COINSPOT_API_URL      - API base URL (optional)

Usage:
    python scripts/coinspot_cli.py balances
    python scripts/coinspot_cli.py buy BTC 0.5 60000
    python scripts/coinspot_cli.py --config config.yaml cancel-buy 12345
"""

import sys
from pathlib import Path

# Add src directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from coinspot.cli import main


if __name__ == "__main__":
    sys.exit(main())
