from __future__ import annotations

import pytest

from src.staff_directory.staff_directory.core.exceptions import ConfigurationError, DocumentError
from src.staff_directory.staff_directory.documents import downloads


@pytest.fixture
def no_platform_dir(monkeypatch, tmp_path):
    monkeypatch.setattr(downloads.platformdirs, "user_downloads_dir", lambda: str(tmp_path / "platform"))
    monkeypatch.delenv("HOME", raising=False)
    monkeypatch.delenv("USERPROFILE", raising=False)


def test_override_wins(tmp_path, no_platform_dir):
    target = tmp_path / "custom"
    target.mkdir()
    assert downloads.get_downloads_dir(target) == target


def test_missing_override_falls_back_to_home(tmp_path, monkeypatch, no_platform_dir):
    (tmp_path / "Downloads").mkdir()
    monkeypatch.setenv("HOME", str(tmp_path))
    assert downloads.get_downloads_dir(tmp_path / "missing") == tmp_path / "Downloads"


def test_userprofile_fallback(tmp_path, monkeypatch, no_platform_dir):
    (tmp_path / "Downloads").mkdir()
    monkeypatch.setenv("USERPROFILE", str(tmp_path))
    assert downloads.get_downloads_dir() == tmp_path / "Downloads"


def test_no_downloads_directory(no_platform_dir):
    with pytest.raises(ConfigurationError, match="Could not find Downloads directory"):
        downloads.get_downloads_dir()


@pytest.mark.parametrize(
    "platform, command",
    [("win32", "explorer"), ("darwin", "open"), ("linux", "xdg-open")],
)
def test_file_manager_command_per_platform(platform, command):
    assert downloads.file_manager_command("/tmp/x", platform) == [command, "/tmp/x"]


def test_open_in_file_manager(monkeypatch, tmp_path):
    calls = []
    monkeypatch.setattr(downloads.subprocess, "Popen", lambda cmd: calls.append(cmd))
    downloads.open_in_file_manager(tmp_path)
    assert calls == [downloads.file_manager_command(str(tmp_path))]


def test_open_in_file_manager_failure(monkeypatch, tmp_path):
    def missing(cmd):
        raise FileNotFoundError(cmd[0])

    monkeypatch.setattr(downloads.subprocess, "Popen", missing)
    with pytest.raises(DocumentError, match="Failed to open folder"):
        downloads.open_in_file_manager(tmp_path)
