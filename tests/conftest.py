"""Pytest configuration.

Tests import from the `covid_nlq.*` namespace. This conftest puts the repository root on `sys.path`
so `pytest` also works without installing the package.
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure `import covid_nlq...` works when running pytest without installing the package.
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))
