"""Response models for the transcription API."""

from typing import Literal

from pydantic import BaseModel

from chunked_transcriber.domain import ErrorKind


class TranscriptResponse(BaseModel):
    """Response returned after a successful transcription."""

    file_name: str | None
    transcript: str
    segment_count: int


class ProgressEvent(BaseModel):
    """Status update emitted while a transcription runs."""

    type: Literal["progress"] = "progress"
    message: str


class ResultEvent(BaseModel):
    """Final event of a successful streamed transcription."""

    type: Literal["result"] = "result"
    transcript: str
    segment_count: int


class ErrorEvent(BaseModel):
    """Final event of a failed streamed transcription."""

    type: Literal["error"] = "error"
    error_kind: ErrorKind
    message: str
