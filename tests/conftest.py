"""Pytest configuration for test isolation.

Settings are read from ``MONARCH_IMPORT_*`` environment variables, and the CLI
loads a ``.env`` from the working directory. A developer's shell or ``.env``
must not leak into assertions, so each test starts from a clean environment
inside its own temporary working directory.
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def _isolate_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    for name in list(os.environ):
        if name.startswith("MONARCH_IMPORT_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def reference_rows() -> list[dict[str, str]]:
    """A small categorized export in learning order."""

    return [
        {"Date": "2024-01-02", "Merchant": "Starbucks", "Category": "Coffee Shops", "Account": "Visa"},
        {"Date": "2024-01-03", "Merchant": "Loblaws", "Category": "Groceries", "Account": "Visa"},
        {"Date": "2024-01-04", "Merchant": "STARBUCKS", "Category": "Restaurants", "Account": "Visa"},
        {"Date": "2024-01-05", "Merchant": "Starbucks", "Category": "Coffee Shops", "Account": "Amex"},
        {"Date": "2024-01-06", "Merchant": "Shell", "Category": "Gas", "Account": ""},
    ]
