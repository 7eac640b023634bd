from __future__ import annotations

import pytest
from pydantic import ValidationError

from ssml_speak.config import AppSettings


def test_defaults(monkeypatch) -> None:
    monkeypatch.delenv("SSML_SPEAK_BACKEND", raising=False)
    settings = AppSettings()
    assert settings.BACKEND == "auto"
    assert settings.DEFAULT_LOCALE == "en-US"
    assert settings.LOG_FILE_PATTERN.endswith(".log")


def test_backend_from_env_is_lowercased(monkeypatch) -> None:
    monkeypatch.setenv("SSML_SPEAK_BACKEND", "SAPI")
    assert AppSettings().BACKEND == "sapi"


def test_unknown_backend_rejected(monkeypatch) -> None:
    monkeypatch.setenv("SSML_SPEAK_BACKEND", "festival")
    with pytest.raises(ValidationError):
        AppSettings()


def test_log_dir_from_env(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("SSML_SPEAK_LOG_DIR", str(tmp_path))
    assert AppSettings().LOG_DIR == tmp_path


def test_log_dir_defaults_to_working_directory(monkeypatch, tmp_path) -> None:
    monkeypatch.delenv("SSML_SPEAK_LOG_DIR", raising=False)
    monkeypatch.chdir(tmp_path)
    assert AppSettings().LOG_DIR == tmp_path
