#!/usr/bin/env python3
"""
List the Toggl Track workspaces available to the configured API token.

Usage:
    uv run python src/scripts/list_workspaces.py
"""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import requests

from services.toggl import TogglClient


def main():
    """Print id and name of every workspace."""
    print("Fetching workspaces from Toggl Track...\n")
    try:
        workspaces = TogglClient().get_workspaces()
    except (ValueError, requests.RequestException) as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(f"Found {len(workspaces)} workspace(s)\n")
    print("=" * 60)
    for workspace in workspaces:
        print(f"  {workspace.id:>10}  {workspace.name}")
    print("=" * 60)


if __name__ == "__main__":
    main()
