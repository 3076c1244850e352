"""
Smoke-test fixtures for a running PetClinic deployment.

Provides the ``smoke_base_url`` session-scoped fixture. The URL comes
from ``TEST_BASE_URL``; when nothing answers there the whole smoke
suite is skipped instead of failing.

Key SDET Concepts Demonstrated:
- Session-scoped URL fixtures shared across all smoke tests
- Skipping environment-dependent suites cleanly
"""

from __future__ import annotations

import os

import pytest
import requests


@pytest.fixture(scope="session")
def smoke_base_url() -> str:
    """Return the deployment URL, skipping when it is not reachable."""
    base_url = os.getenv("TEST_BASE_URL", "http://localhost:5000").rstrip("/")
    try:
        requests.get(f"{base_url}/api/health", timeout=3)
    except requests.RequestException as exc:
        pytest.skip(f"No PetClinic server reachable at {base_url}: {exc}")
    return base_url
