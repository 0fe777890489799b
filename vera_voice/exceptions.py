"""Custom exception types for vera-voice."""

from typing import Optional


class VeraVoiceError(Exception):
    """Base exception for vera-voice errors."""

    exit_code: int = 1
    status_code: int = 500
    error_type: str = "server_error"

    def __init__(self, message: str, detail: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class InvalidArgumentError(VeraVoiceError):
    """Raised when a request field or encoder argument is invalid."""

    exit_code = 1
    status_code = 400
    error_type = "invalid_argument"


class ConfigError(VeraVoiceError):
    """Raised when the configuration file cannot be loaded."""

    exit_code = 2
    error_type = "config_error"


class SynthesisError(VeraVoiceError):
    """Raised when audio generation fails."""

    exit_code = 3
    error_type = "synthesis_error"


class QuotaExceededError(SynthesisError):
    """Raised when the upstream API reports a quota or rate limit."""

    status_code = 429
    error_type = "quota_exceeded"

    def __init__(
        self,
        message: str,
        detail: Optional[str] = None,
        retry_delay: Optional[int] = None,
    ) -> None:
        super().__init__(message, detail)
        self.retry_delay = retry_delay


class AuthenticationError(SynthesisError):
    """Raised when the upstream API rejects the API key."""

    status_code = 401
    error_type = "authentication_error"


class ModelNotFoundError(SynthesisError):
    """Raised when the requested upstream model does not exist."""

    status_code = 404
    error_type = "model_not_found"


class PlaybackError(VeraVoiceError):
    """Raised when audio playback fails."""

    exit_code = 4
    error_type = "playback_error"


class AccessForbiddenError(AuthenticationError):
    """Raised when the API key lacks permission for the requested model."""

    status_code = 403
    error_type = "access_forbidden"


class UpstreamAPIError(SynthesisError):
    """Raised for upstream API errors without a more specific mapping."""

    error_type = "upstream_error"

    def __init__(
        self, message: str, status_code: int = 500, detail: Optional[str] = None
    ) -> None:
        super().__init__(message, detail)
        self.status_code = status_code
