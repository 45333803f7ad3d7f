"""
Pytest configuration

Puts the project root on sys.path so tests run from a plain checkout.
"""

import sys
from pathlib import Path


def pytest_configure(config):
    """Add the project root to sys.path before collection."""
    project_root = str(Path(__file__).parent.parent.resolve())

    if project_root not in sys.path:
        sys.path.insert(0, project_root)
