"""Domain models for chunked transcription."""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum

from pydantic import BaseModel

from chunked_transcriber.domain.source import ByteSource

ProgressCallback = Callable[[str], None]


@dataclass(frozen=True)
class Segment:
    """A contiguous byte range of a source, transcribed independently."""

    index: int
    start: int
    end: int
    mime_type: str
    source: ByteSource = field(repr=False, compare=False)

    @property
    def position(self) -> int:
        """1-based position used in user-facing messages."""
        return self.index + 1

    @property
    def size(self) -> int:
        return self.end - self.start

    def read(self) -> bytes:
        return self.source.slice(self.start, self.end)


class SegmentResult(BaseModel, frozen=True):
    """Transcribed text of one segment, tagged with its original index."""

    index: int
    text: str


class ErrorKind(StrEnum):
    CONFIGURATION = "configuration"
    EMPTY_INPUT = "empty_input"
    SEGMENT_TRANSCRIPTION = "segment_transcription"
    UNEXPECTED = "unexpected"


class TranscriptionOutcome(BaseModel, frozen=True):
    """Result of one orchestration call: a transcript or a failure."""

    success: bool
    transcript: str | None = None
    error_kind: ErrorKind | None = None
    message: str | None = None
    segment_count: int = 0

    @classmethod
    def succeeded(cls, transcript: str, segment_count: int) -> "TranscriptionOutcome":
        return cls(success=True, transcript=transcript, segment_count=segment_count)

    @classmethod
    def failed(
        cls, kind: ErrorKind, message: str, segment_count: int = 0
    ) -> "TranscriptionOutcome":
        return cls(
            success=False,
            error_kind=kind,
            message=message,
            segment_count=segment_count,
        )
