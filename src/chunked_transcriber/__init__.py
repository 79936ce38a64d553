"""Chunked Russian-language transcription backed by Gemini."""

from chunked_transcriber.domain import (
    ByteSource,
    FileSource,
    InMemorySource,
    TranscriptionOutcome,
)
from chunked_transcriber.exceptions import (
    ConfigurationError,
    SegmentTranscriptionError,
    TranscriptionError,
)
from chunked_transcriber.handlers import TranscriptionHandler

__all__ = [
    "ByteSource",
    "ConfigurationError",
    "FileSource",
    "InMemorySource",
    "SegmentTranscriptionError",
    "TranscriptionError",
    "TranscriptionHandler",
    "TranscriptionOutcome",
]
