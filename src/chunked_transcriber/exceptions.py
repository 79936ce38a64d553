"""Custom exceptions for the transcription service."""


class ConfigurationError(Exception):
    """Raised when a required setting is missing or unusable."""

    def __init__(self, setting: str, reason: str):
        self.setting = setting
        self.reason = reason
        super().__init__(f"Invalid configuration for '{setting}': {reason}")


class TranscriptionError(Exception):
    """Base class for failures while transcribing a recording."""


class SegmentTranscriptionError(TranscriptionError):
    """Raised when transcribing a single segment fails."""

    def __init__(self, position: int, cause: Exception | None = None):
        self.position = position
        self.cause = cause
        super().__init__(f"Failed to transcribe segment {position}")
