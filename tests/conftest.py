"""Shared pytest fixtures for mdbook-tailwindcss tests."""

from __future__ import annotations

import pytest

from tests.helpers import FakeResolver


@pytest.fixture
def resolver() -> FakeResolver:
    """Resolver that knows ``text-red-500`` and ``font-bold`` only."""
    return FakeResolver(
        {
            "text-red-500": "color:red;",
            "font-bold": "font-weight:700;",
        }
    )
