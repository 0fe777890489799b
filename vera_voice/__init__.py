"""vera-voice: Gemini text-to-speech with WAV output."""

__version__ = "0.1.0"
