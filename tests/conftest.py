import pytest

from memoqueue.constants import EnvVars


class FakeClock:
    """Manually advanced monotonic clock (seconds)."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def _isolate_memoqueue_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep MEMOQUEUE_* settings from the developer's shell out of the tests."""
    for name in EnvVars.ALL:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
