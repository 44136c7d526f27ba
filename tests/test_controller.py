"""Tests for the SettingsEditor controller."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from nasmonitor.controller import (
    STATUS_RESTART_FAILED,
    STATUS_RESTARTED,
    STATUS_SAVED,
    SettingsEditor,
)
from nasmonitor.errors import UnknownFieldError
from nasmonitor.settings.store import load_settings
from nasmonitor.settings.user import MonitorSettings


class _FakeService:
    def __init__(self, ok: bool) -> None:
        self.ok = ok
        self.calls = 0

    def restart(self) -> bool:
        self.calls += 1
        return self.ok


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    return tmp_path / "config.conf"


def test_editor_starts_from_defaults_without_file(config_path: Path) -> None:
    editor = SettingsEditor(config_path)
    assert editor.found is False
    assert editor.settings == MonitorSettings()
    assert editor.status == ""


def test_editor_reads_existing_file(config_path: Path) -> None:
    config_path.write_text("[nas_devices]\nnas1.local/media\n")
    editor = SettingsEditor(config_path)
    assert editor.found is True
    assert editor.settings.nas_devices == ["nas1.local/media"]


def test_update_and_save(config_path: Path) -> None:
    editor = SettingsEditor(config_path)
    editor.update(home_networks="Home", home_ac_interval=30, enable_notifications=False)

    assert editor.save() is True
    assert editor.status == STATUS_SAVED
    assert editor.found is True

    loaded = load_settings(config_path).settings
    assert loaded.home_networks == "Home"
    assert loaded.home_ac_interval == 30
    assert loaded.enable_notifications is False


def test_update_clamps_to_form_limits(config_path: Path) -> None:
    editor = SettingsEditor(config_path)
    editor.update(home_ac_interval=1, away_battery_interval=99999, min_battery_level="70")

    assert editor.settings.home_ac_interval == 5
    assert editor.settings.away_battery_interval == 3600
    assert editor.settings.min_battery_level == 50


def test_update_leaves_unedited_values_alone(config_path: Path) -> None:
    # Loaded values outside the form limits are only clamped when edited
    config_path.write_text("away_ac_interval=abc\n")
    editor = SettingsEditor(config_path)
    editor.update(home_networks="Home")
    assert editor.settings.away_ac_interval == 0


def test_update_rejects_unknown_field(config_path: Path) -> None:
    editor = SettingsEditor(config_path)
    with pytest.raises(UnknownFieldError):
        editor.update(nas_devices=["a/b"])
    with pytest.raises(UnknownFieldError):
        editor.update(poll_interval=5)


def test_update_is_all_or_nothing(config_path: Path) -> None:
    editor = SettingsEditor(config_path)
    with pytest.raises(ValidationError):
        editor.update(home_networks="Lab", home_ac_interval="often")
    assert editor.settings.home_networks == ""
    assert editor.settings.home_ac_interval == 15


def test_device_edits_report_status(config_path: Path) -> None:
    editor = SettingsEditor(config_path)

    assert editor.add_device("noSlashHere") is False
    assert "host/share" in editor.status
    assert editor.settings.nas_devices == []

    assert editor.add_device("nas.local/media") is True
    assert editor.status == "Added nas.local/media"

    assert editor.remove_device(3) is False
    assert editor.settings.nas_devices == ["nas.local/media"]

    assert editor.remove_device(0) is True
    assert editor.settings.nas_devices == []


def test_add_device_at_capacity(config_path: Path) -> None:
    settings = MonitorSettings(nas_devices=[f"nas{i}/share" for i in range(10)])
    editor = SettingsEditor(config_path, settings=settings)

    assert editor.add_device("extra/share") is False
    assert editor.status == "Cannot add more than 10 NAS devices"
    assert editor.settings.device_count == 10


def test_device_edits_need_save(config_path: Path) -> None:
    editor = SettingsEditor(config_path)
    editor.add_device("nas.local/media")
    assert not config_path.exists()

    editor.save()
    assert load_settings(config_path).settings.nas_devices == ["nas.local/media"]


def test_save_failure_keeps_settings(tmp_path: Path) -> None:
    editor = SettingsEditor(tmp_path / "missing" / "config.conf")
    editor.update(home_networks="Home")

    assert editor.save() is False
    assert editor.status.startswith("Failed to save configuration: ")
    assert editor.settings.home_networks == "Home"


@pytest.mark.parametrize(
    "ok, status",
    [(True, STATUS_RESTARTED), (False, STATUS_RESTART_FAILED)],
)
def test_restart_service_status(config_path: Path, ok: bool, status: str) -> None:
    fake = _FakeService(ok)
    editor = SettingsEditor(config_path, service=fake)  # type: ignore[arg-type]

    assert editor.restart_service() is ok
    assert editor.status == status
    assert fake.calls == 1
