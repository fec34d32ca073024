"""Shared pytest fixtures for annotation-brackets tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from annotation_brackets.config import get_settings

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture(autouse=True)
def _reset_settings_cache() -> Iterator[None]:
    """Drop cached Settings so env changes in one test never leak into another."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
