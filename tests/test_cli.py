from __future__ import annotations

import io
import wave
from pathlib import Path

import pytest
from typer.testing import CliRunner

from vera_voice import cli

from .fakes import FakeGenaiClient, make_audio_response

runner = CliRunner()


def test_wrap_writes_playable_wav(tmp_path: Path) -> None:
    pcm_path = tmp_path / "speech.pcm"
    pcm = b"\x00\x01" * 4800
    pcm_path.write_bytes(pcm)

    result = runner.invoke(cli.app, ["wrap", str(pcm_path), "--sample-rate", "16000"])

    assert result.exit_code == 0, result.output
    wav_path = tmp_path / "speech.wav"
    with wave.open(str(wav_path), "rb") as wf:
        assert wf.getframerate() == 16000
        assert wf.getnchannels() == 1
        assert wf.readframes(wf.getnframes()) == pcm


def test_wrap_rejects_bad_parameters(tmp_path: Path) -> None:
    pcm_path = tmp_path / "speech.pcm"
    pcm_path.write_bytes(b"\x00\x00")

    result = runner.invoke(cli.app, ["wrap", str(pcm_path), "--channels", "0"])

    assert result.exit_code == 1
    assert not (tmp_path / "speech.wav").exists()


def test_list_voices_shows_catalogue() -> None:
    result = runner.invoke(cli.app, ["list-voices"])

    assert result.exit_code == 0
    assert "Achernar" in result.output
    assert "Zubenelgenubi" in result.output


def test_list_expressions() -> None:
    result = runner.invoke(cli.app, ["list-expressions"])

    assert result.exit_code == 0
    assert "professional_neutral" in result.output
    assert "warm_friendly" in result.output


def test_synthesize_requires_api_key() -> None:
    result = runner.invoke(cli.app, ["--text", "Hello"])

    assert result.exit_code == 1


def test_synthesize_writes_output_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    pcm = b"\x05\x00" * 2400
    client = FakeGenaiClient(response=make_audio_response(pcm))
    monkeypatch.setattr(
        "vera_voice.cli.synthesize_speech",
        _bind_default_factory(lambda api_key: client),
    )
    output = tmp_path / "out.wav"

    result = runner.invoke(
        cli.app,
        ["--text", "Hello", "--voice", "Kore", "--api-key", "k", "--output", str(output), "--quiet"],
    )

    assert result.exit_code == 0, result.output
    with wave.open(io.BytesIO(output.read_bytes()), "rb") as wf:
        assert wf.readframes(wf.getnframes()) == pcm
    call = client.models.calls[0]
    assert call["config"].speech_config.voice_config.prebuilt_voice_config.voice_name == "Kore"


def test_synthesize_reports_invalid_voice() -> None:
    result = runner.invoke(cli.app, ["--text", "Hello", "--voice", "Nobody", "--api-key", "k"])

    assert result.exit_code == 1


def test_version_flag() -> None:
    result = runner.invoke(cli.app, ["--version"])

    assert result.exit_code == 0
    assert "vera-voice version" in result.output


def _bind_default_factory(factory):  # noqa: ANN001, ANN202
    from vera_voice.synthesis import synthesize_speech

    def wrapper(**kwargs):  # noqa: ANN003, ANN202
        return synthesize_speech(client_factory=factory, **kwargs)

    return wrapper
