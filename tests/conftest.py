"""Shared fixtures."""

import pytest


class FakeClock:
    """Deterministic clock that advances one second per reading."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        self.now += 1
        return self.now


@pytest.fixture
def clock():
    return FakeClock()
