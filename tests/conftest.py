"""
Global pytest configuration and shared fixtures.

This file provides configuration settings and fixtures for all test modules.
"""
from typing import Any, Callable, Dict, Iterable, List
from unittest.mock import MagicMock

import pytest

from spechelpers.dataprovider import GroupRegistry


@pytest.fixture
def sample_labels() -> list:
    """Return a list dataset of plain labels."""
    return ["chrome", "firefox", "webkit"]


@pytest.fixture
def sample_sizes() -> Dict[str, Any]:
    """Return a keyed dataset mixing single values and argument lists."""
    return {
        "small": 320,
        "medium": [768, 1024],
        "large": (1920, 1080),
    }


@pytest.fixture
def registry() -> GroupRegistry:
    """Return an empty in-memory group registry."""
    return GroupRegistry()


@pytest.fixture
def recorder() -> Callable[..., None]:
    """Return a test body that records the arguments of every call in `.calls`."""
    calls: List[tuple] = []

    def body(*args):
        calls.append(args)

    body.calls = calls
    return body


@pytest.fixture
def make_page() -> Callable[..., MagicMock]:
    """
    Build a mock Playwright page whose document element reports the given sizes.

    Each size reading consumes the next (width, height) pair; the last pair
    repeats once the list is exhausted.
    """
    from spechelpers.domutils import WINDOW_SIZE_SCRIPT

    def factory(sizes: Iterable[tuple]) -> MagicMock:
        readings = list(sizes)
        page = MagicMock(name="page")

        def evaluate(script, *args):
            if script == WINDOW_SIZE_SCRIPT:
                width, height = readings.pop(0) if len(readings) > 1 else readings[0]
                return {"width": width, "height": height}
            return None

        page.evaluate.side_effect = evaluate
        return page

    return factory
