from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Any

import pytest

from vera_voice import playback
from vera_voice.exceptions import PlaybackError
from vera_voice.wav import pcm_to_wav


def test_custom_player_command_is_split() -> None:
    cmd = playback.build_player_command(Path("/tmp/a.wav"), "mpv --really-quiet")

    assert cmd == ["mpv", "--really-quiet", "/tmp/a.wav"]


def test_play_wav_writes_temp_file_and_cleans_up(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: dict[str, Any] = {}
    wav = pcm_to_wav(b"\x00\x00" * 10, 24000, 1, 2)

    def fake_run(cmd: list[str], check: bool, capture_output: bool) -> None:
        path = Path(cmd[-1])
        seen["cmd"] = cmd
        seen["bytes"] = path.read_bytes()
        seen["path"] = path

    monkeypatch.setattr(subprocess, "run", fake_run)

    playback.play_wav(wav, player_command="player")

    assert seen["cmd"][0] == "player"
    assert seen["bytes"] == wav
    assert not seen["path"].exists()


def test_failed_player_raises_playback_error(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_run(cmd: list[str], check: bool, capture_output: bool) -> None:
        raise subprocess.CalledProcessError(1, cmd)

    monkeypatch.setattr(subprocess, "run", fake_run)

    with pytest.raises(PlaybackError, match="Playback command failed"):
        playback.play_wav(b"RIFF", player_command="player")
