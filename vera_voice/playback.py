"""Cross-platform WAV playback through a system player."""

import shutil
import subprocess
import sys
import tempfile
from pathlib import Path
from typing import Optional

from .exceptions import PlaybackError

LINUX_PLAYERS = ("play", "ffplay", "aplay", "paplay", "mpv", "vlc")


def build_player_command(path: Path, player_command: Optional[str] = None) -> list[str]:
    if player_command:
        return player_command.split() + [str(path)]

    if sys.platform == "win32":
        powershell = shutil.which("powershell")
        if powershell:
            return [
                powershell,
                "-Command",
                f'(New-Object Media.SoundPlayer "{path}").PlaySync()',
            ]
        raise PlaybackError("No audio player available on Windows")

    if sys.platform == "darwin":
        afplay = shutil.which("afplay")
        if afplay:
            return [afplay, str(path)]
        raise PlaybackError("afplay not found on macOS")

    for player in LINUX_PLAYERS:
        player_path = shutil.which(player)
        if player_path:
            if player == "ffplay":
                return [player_path, "-nodisp", "-autoexit", str(path)]
            if player in ("mpv", "vlc"):
                return [player_path, "--no-video", str(path)]
            return [player_path, str(path)]

    raise PlaybackError(
        "No audio player found. Install ffplay, aplay, paplay, mpv, or vlc"
    )


def play_file(path: Path, player_command: Optional[str] = None) -> None:
    cmd = build_player_command(path, player_command)
    try:
        subprocess.run(cmd, check=True, capture_output=True)
    except subprocess.CalledProcessError as e:
        raise PlaybackError(f"Playback command failed: {e}") from e
    except FileNotFoundError as e:
        raise PlaybackError(f"Player not found: {e}") from e


def play_wav(wav: bytes, player_command: Optional[str] = None) -> None:
    """Play in-memory WAV bytes via a temporary file."""
    with tempfile.NamedTemporaryFile(suffix=".wav", delete=False) as f:
        f.write(wav)
        temp_path = Path(f.name)

    try:
        play_file(temp_path, player_command)
    finally:
        temp_path.unlink(missing_ok=True)
