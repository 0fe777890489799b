"""Prebuilt Gemini voice catalogue."""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class VoiceModel(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    gender: str
    trait: str


VOICE_MODELS: tuple[VoiceModel, ...] = (
    # Female voices
    VoiceModel(name="Achernar", gender="Female", trait="Soft, Higher pitch"),
    VoiceModel(name="Aoede", gender="Female", trait="Breezy, Middle pitch"),
    VoiceModel(name="Autonoe", gender="Female", trait="Bright, Middle pitch"),
    VoiceModel(name="Callirrhoe", gender="Female", trait="Easy-going, Middle pitch"),
    VoiceModel(name="Despina", gender="Female", trait="Smooth, Middle pitch"),
    VoiceModel(name="Erinome", gender="Female", trait="Clear, Middle pitch"),
    VoiceModel(name="Gacrux", gender="Female", trait="Mature, Middle pitch"),
    VoiceModel(name="Kore", gender="Female", trait="Firm, Middle pitch"),
    VoiceModel(name="Laomedeia", gender="Female", trait="Upbeat, Higher pitch"),
    VoiceModel(name="Leda", gender="Female", trait="Youthful, Higher pitch"),
    VoiceModel(name="Pulcherrima", gender="Female", trait="Forward, Middle pitch"),
    VoiceModel(name="Sulafat", gender="Female", trait="Warm, Middle pitch"),
    VoiceModel(name="Vindemiatrix", gender="Female", trait="Gentle, Middle pitch"),
    VoiceModel(name="Zephyr", gender="Female", trait="Bright, Higher pitch"),
    # Male voices
    VoiceModel(name="Achird", gender="Male", trait="Friendly, Lower middle pitch"),
    VoiceModel(name="Algenib", gender="Male", trait="Gravelly, Lower pitch"),
    VoiceModel(name="Algieba", gender="Male", trait="Smooth, Lower pitch"),
    VoiceModel(name="Alnilam", gender="Male", trait="Firm, Lower middle pitch"),
    VoiceModel(name="Charon", gender="Male", trait="Informative, Lower pitch"),
    VoiceModel(name="Enceladus", gender="Male", trait="Breathy, Lower pitch"),
    VoiceModel(name="Fenrir", gender="Male", trait="Excitable, Lower middle pitch"),
    VoiceModel(name="Iapetus", gender="Male", trait="Clear, Lower middle pitch"),
    VoiceModel(name="Orus", gender="Male", trait="Firm, Lower middle pitch"),
    VoiceModel(name="Puck", gender="Male", trait="Upbeat, Middle pitch"),
    VoiceModel(name="Rasalgethi", gender="Male", trait="Informative, Middle pitch"),
    VoiceModel(name="Sadachbia", gender="Male", trait="Lively, Lower pitch"),
    VoiceModel(name="Sadaltager", gender="Male", trait="Knowledgeable, Middle pitch"),
    VoiceModel(name="Schedar", gender="Male", trait="Even, Lower middle pitch"),
    VoiceModel(name="Umbriel", gender="Male", trait="Easy-going, Lower middle pitch"),
    VoiceModel(name="Zubenelgenubi", gender="Male", trait="Casual, Lower middle pitch"),
)


def list_available_voices(voices: tuple[VoiceModel, ...] = VOICE_MODELS) -> list[str]:
    """List voice names in catalogue order."""
    return [voice.name for voice in voices]


def find_voice(
    name: str, voices: tuple[VoiceModel, ...] = VOICE_MODELS
) -> Optional[VoiceModel]:
    """Look up a voice by exact name.

    Names are matched case-sensitively; the upstream API rejects anything else.
    """
    for voice in voices:
        if voice.name == name:
            return voice
    return None


def group_by_gender(
    voices: tuple[VoiceModel, ...] = VOICE_MODELS,
) -> dict[str, list[VoiceModel]]:
    groups: dict[str, list[VoiceModel]] = {}
    for voice in voices:
        groups.setdefault(voice.gender, []).append(voice)
    return groups
