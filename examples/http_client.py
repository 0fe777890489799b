#!/usr/bin/env python3
"""Simple HTTP client for the vera-voice server.

Usage:
    python http_client.py "Hello, this is a test"
    python http_client.py --voice Kore --expression warm_friendly "Hello world"
    python http_client.py --url http://localhost:8000 --output hello.wav "Hello"

The API key is read from --api-key or the GEMINI_API_KEY environment variable.
"""

import argparse
import base64
import os
import shutil
import subprocess
import sys
import time

try:
    import httpx
except ImportError:
    print("Please install httpx: pip install httpx")
    sys.exit(1)

AUDIO_PLAYERS = ["play", "ffplay", "aplay", "paplay", "mpv", "vlc"]
DEFAULT_MODEL_ID = "gemini-2.5-flash-preview-tts"


def find_audio_player() -> str | None:
    """Find first available command-line audio player."""
    for player in AUDIO_PLAYERS:
        if shutil.which(player):
            return player
    return None


def synthesize(
    url: str,
    text: str,
    voice: str,
    expression: str,
    api_key: str,
    model_id: str,
) -> dict:
    response = httpx.post(
        f"{url.rstrip('/')}/api/synthesize",
        json={
            "text": text,
            "model_name": voice,
            "expression": expression,
            "apiKey": api_key,
            "modelId": model_id,
        },
        timeout=120.0,
    )
    data = response.json()
    if response.status_code != 200:
        message = data.get("error", response.text)
        retry = data.get("retryDelay")
        if retry:
            message += f" (retry in {retry}s)"
        raise SystemExit(f"Error {response.status_code}: {message}")
    return data


def main() -> None:
    parser = argparse.ArgumentParser(description="vera-voice HTTP client")
    parser.add_argument("text", help="Text to synthesize")
    parser.add_argument("--url", default="http://localhost:8000", help="Server URL")
    parser.add_argument("--voice", default="Puck", help="Voice name")
    parser.add_argument("--expression", default="professional_neutral", help="Expression style")
    parser.add_argument("--model-id", default=DEFAULT_MODEL_ID, help="Gemini TTS model id")
    parser.add_argument("--api-key", default=os.environ.get("GEMINI_API_KEY"), help="Gemini API key")
    parser.add_argument("--output", "-o", help="Output file (default: derived from response)")
    parser.add_argument("--no-play", action="store_true", help="Do not play the audio")
    args = parser.parse_args()

    if not args.api_key:
        print("No API key. Use --api-key or set GEMINI_API_KEY.")
        sys.exit(1)

    print(f"Synthesizing with {args.voice} ({args.expression})...")
    data = synthesize(
        args.url, args.text, args.voice, args.expression, args.api_key, args.model_id
    )

    audio = base64.b64decode(data["file_data"])
    output = args.output or (
        f"vera_voice_{data['model_used']}_{data['expression_used']}_"
        f"{int(time.time() * 1000)}.{data['file_type']}"
    )
    with open(output, "wb") as f:
        f.write(audio)
    print(f"Saved {len(audio)} bytes to {output}")

    if args.no_play:
        return
    player = find_audio_player()
    if player:
        subprocess.run([player, output], check=False, capture_output=True)
    else:
        print("No audio player found; skipping playback.")


if __name__ == "__main__":
    main()
