"""Infrastructure layer exports."""

from .gemini_transcriber import GeminiSegmentTranscriber

__all__ = ["GeminiSegmentTranscriber"]
