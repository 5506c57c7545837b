"""
Shared fixtures for check-pages tests.
"""
from __future__ import annotations

from typing import Any, Callable, Iterator

import pytest

from check_pages.config import CheckConfig
from check_pages.http import Fetcher
from check_pages.reporting import RecordingReporter


class StepClock:
    """Monotonic fake clock that moves forward a fixed step on every read."""

    def __init__(self, step_ms: float):
        self.step = step_ms / 1000
        self.now = 0.0

    def __call__(self) -> float:
        current = self.now
        self.now += self.step
        return current


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def fetcher() -> Iterator[Fetcher]:
    f = Fetcher()
    yield f
    f.close()


@pytest.fixture
def make_config() -> Callable[..., CheckConfig]:
    def _make(*page_urls: str, **options: Any) -> CheckConfig:
        return CheckConfig.from_options({"pageUrls": list(page_urls), **options})
    return _make


@pytest.fixture
def step_clock() -> Callable[[float], StepClock]:
    return StepClock
