"""Root-level pytest configuration for all tests."""

from __future__ import annotations

# Configure pytest plugins at top level
pytest_plugins = ('pytest_asyncio')
