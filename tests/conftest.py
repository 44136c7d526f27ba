import pytest


@pytest.fixture(autouse=True)
def _no_config_override(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's NAS_MONITOR_CONFIG out of the tests."""
    monkeypatch.delenv("NAS_MONITOR_CONFIG", raising=False)
