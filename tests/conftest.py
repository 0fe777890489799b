from __future__ import annotations

import pytest

from vera_voice.config import Config


@pytest.fixture
def config() -> Config:
    return Config()


@pytest.fixture(autouse=True)
def isolated_config_dir(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> None:
    # Never pick up a developer's real config file.
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path_factory.mktemp("xdg")))
    monkeypatch.delenv("VERA_VOICE_CONFIG", raising=False)
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
