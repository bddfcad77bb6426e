#!/usr/bin/env python3
"""
propmatch - Property Matching CLI

Thin shell over propmatch.rules: loads conditions and property bags,
runs the matcher, prints results. No matching logic lives here.

Examples:
  python propmatch_cli.py operators
  python propmatch_cli.py match -c '{"key": "plan", "value": "pro"}' -p '{"plan": "pro"}'
  python propmatch_cli.py batch -f cases.yaml
"""

import sys

from propmatch.cli import main


if __name__ == "__main__":
    sys.exit(main())
