"""Shared pytest fixtures for Inkdown tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from dotenv import load_dotenv

from inkdown.config import get_settings

if TYPE_CHECKING:
    from collections.abc import Generator

load_dotenv()


@pytest.fixture(autouse=True)
def _fresh_settings() -> Generator[None]:
    """Reset the cached Settings so env changes in one test never leak."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
