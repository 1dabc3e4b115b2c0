"""Shared fixtures for the request compiler tests."""

from typing import Any, Dict, Iterable, Optional

import pytest

from j2v.params import DictParameterSource


class FailingParameterSource:
    """Wrap a source and raise for selected parameter names."""

    def __init__(
        self,
        inner: DictParameterSource,
        failing: Iterable[str],
        error: Optional[Exception] = None,
    ) -> None:
        self.inner = inner
        self.failing = set(failing)
        self.error = error or RuntimeError("parameter not available")

    def get(self, name: str, item_index: int = 0, fallback: Any = None) -> Any:
        if name in self.failing:
            raise self.error
        return self.inner.get(name, item_index, fallback)


@pytest.fixture
def make_params():
    """Build a single-item parameter source from a dict and/or keywords."""
    def _make(params: Optional[Dict[str, Any]] = None, **kwargs: Any) -> DictParameterSource:
        return DictParameterSource.single({**(params or {}), **kwargs})
    return _make


@pytest.fixture
def video_element() -> Dict[str, Any]:
    return {"type": "video", "src": "https://example.com/clip.mp4"}


@pytest.fixture
def text_element() -> Dict[str, Any]:
    return {"text": "Hello world", "style": "001"}
