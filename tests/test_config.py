from __future__ import annotations

from pathlib import Path

import pytest

from vera_voice.config import Config, get_config_path
from vera_voice.exceptions import ConfigError, InvalidArgumentError
from vera_voice.voices import VOICE_MODELS, find_voice, group_by_gender, list_available_voices


def test_defaults_match_service_contract() -> None:
    config = Config()

    assert len(config.voice_models) == 30
    assert config.expressions == ("professional_neutral", "warm_friendly")
    assert config.default_voice == "Puck"
    assert config.default_expression == "professional_neutral"
    assert (config.audio.sample_rate, config.audio.channels, config.audio.sample_width) == (24000, 1, 2)
    assert config.audio.format == "wav"
    assert config.tts_model == "gemini-2.5-flash-preview-tts"
    assert config.max_text_length == 5000


def test_missing_file_yields_defaults(tmp_path: Path) -> None:
    assert Config.load(tmp_path / "nope.toml") == Config()


def test_load_overrides_from_toml(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text(
        'default_voice = "Kore"\n'
        'accent_instruction = "Say with an Irish accent:"\n'
        "max_text_length = 100\n"
        "\n"
        "[audio]\n"
        "sample_rate = 16000\n"
        "channels = 1\n"
        "sample_width = 2\n",
        encoding="utf-8",
    )

    config = Config.load(path)

    assert config.default_voice == "Kore"
    assert config.accent_instruction == "Say with an Irish accent:"
    assert config.max_text_length == 100
    assert config.audio.sample_rate == 16000
    assert config.audio.format == "wav"


def test_env_var_points_at_config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "custom.toml"
    path.write_text('tts_model = "custom-tts"\n', encoding="utf-8")
    monkeypatch.setenv("VERA_VOICE_CONFIG", str(path))

    assert get_config_path() == path
    assert Config.load().tts_model == "custom-tts"


def test_invalid_toml_raises_config_error(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text("default_voice = \n", encoding="utf-8")

    with pytest.raises(ConfigError):
        Config.load(path)


def test_invalid_values_raise_config_error(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text("[audio]\nsample_rate = 0\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        Config.load(path)


def test_config_is_frozen() -> None:
    config = Config()
    with pytest.raises(Exception):
        config.default_voice = "Kore"  # type: ignore[misc]


def test_get_voice_rejects_unknown_names() -> None:
    config = Config()

    assert config.get_voice("Charon").gender == "Male"
    with pytest.raises(InvalidArgumentError, match="Invalid model_name. Must be one of: Achernar"):
        config.get_voice("charon")


def test_get_expression_instruction_uses_override_table() -> None:
    config = Config()

    assert config.get_expression_instruction("warm_friendly").startswith("Speak in a warm")
    assert config.get_expression_instruction("warm_friendly", {"warm_friendly": "Be nice."}) == "Be nice."
    with pytest.raises(InvalidArgumentError, match="Available expressions: other"):
        config.get_expression_instruction("warm_friendly", {"other": "x"})


def test_voice_catalogue_helpers() -> None:
    names = list_available_voices()

    assert names[0] == "Achernar"
    assert "Zubenelgenubi" in names
    assert find_voice("Leda") is not None
    assert find_voice("Nobody") is None
    groups = group_by_gender(VOICE_MODELS)
    assert len(groups["Female"]) == 14
    assert len(groups["Male"]) == 16


def test_voice_names_follow_catalogue_order() -> None:
    assert Config().voice_names() == list_available_voices()


def test_audio_section_that_cannot_be_encoded_is_a_config_error(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text("[audio]\nchannels = 70000\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        Config.load(path)


def test_greeting_sample_text() -> None:
    assert Config().sample_texts["greeting"] == (
        "Hi, you're through to [Business Name]. My name's Vera — how may I help you today?"
    )
