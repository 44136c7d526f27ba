"""Tests for nasmonitor.service."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import pytest

from nasmonitor import service
from nasmonitor.service import ServiceManager


class _FakeSubprocess:
    """Capture arguments to subprocess.run and return a canned exit status."""

    def __init__(self, returncode: int = 0) -> None:
        self.returncode = returncode
        self.called: dict[str, Any] = {}

    def run(self, cmd: list[str], **kwargs: Any) -> SimpleNamespace:
        self.called["cmd"] = cmd
        self.called["kwargs"] = kwargs
        return SimpleNamespace(returncode=self.returncode, stdout="", stderr="")


def test_restart_runs_systemctl(monkeypatch: pytest.MonkeyPatch) -> None:
    fake = _FakeSubprocess()
    monkeypatch.setattr(service, "subprocess", fake, raising=False)

    assert ServiceManager().restart() is True
    assert fake.called["cmd"] == ["systemctl", "--user", "restart", "nas-monitor.service"]
    assert fake.called["kwargs"]["check"] is False


def test_restart_failure_status(monkeypatch: pytest.MonkeyPatch) -> None:
    fake = _FakeSubprocess(returncode=5)
    monkeypatch.setattr(service, "subprocess", fake, raising=False)

    assert ServiceManager("other.service").restart() is False
    assert fake.called["cmd"][-1] == "other.service"


def test_restart_without_systemctl(monkeypatch: pytest.MonkeyPatch) -> None:
    class _Missing:
        def run(self, cmd: list[str], **kwargs: Any) -> None:
            raise FileNotFoundError(cmd[0])

    monkeypatch.setattr(service, "subprocess", _Missing(), raising=False)

    assert ServiceManager().restart() is False
