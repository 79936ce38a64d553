"""Transcription endpoints."""

import asyncio
import tempfile
from collections.abc import AsyncIterator
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, UploadFile
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask
from pydantic import BaseModel

from chunked_transcriber.dependencies import get_handler
from chunked_transcriber.domain import (
    ErrorKind,
    FileSource,
    TranscriptionOutcome,
    normalize_mime_type,
)
from chunked_transcriber.handlers import TranscriptionHandler
from chunked_transcriber.logging import setup_logging
from chunked_transcriber.response_models import (
    ErrorEvent,
    ProgressEvent,
    ResultEvent,
    TranscriptResponse,
)

logger = setup_logging()

router = APIRouter(prefix="/transcriptions", tags=["transcriptions"])

HandlerDep = Annotated[TranscriptionHandler, Depends(get_handler)]

_COPY_CHUNK_BYTES = 1024 * 1024
_SPOOL_MAX_BYTES = 16 * 1024 * 1024

_FAILURE_STATUS = {
    ErrorKind.CONFIGURATION: 500,
    ErrorKind.EMPTY_INPUT: 422,
    ErrorKind.SEGMENT_TRANSCRIPTION: 502,
    ErrorKind.UNEXPECTED: 500,
}


@router.post("", response_model=TranscriptResponse)
async def create_transcription(
    file: UploadFile, handler: HandlerDep
) -> TranscriptResponse:
    """
    Transcribes an uploaded recording.

    The upload is read segment by segment from its spooled file.
    """
    mime_type = normalize_mime_type(file.filename, file.content_type)
    logger.info(
        "Received transcription request",
        extra={"file_name": file.filename, "mime_type": mime_type},
    )

    outcome = await handler.transcribe(FileSource(file.file, file.size), mime_type)
    if not outcome.success:
        raise HTTPException(
            status_code=_FAILURE_STATUS[outcome.error_kind], detail=outcome.message
        )

    return TranscriptResponse(
        file_name=file.filename,
        transcript=outcome.transcript,
        segment_count=outcome.segment_count,
    )


@router.post("/stream")
async def stream_transcription(
    file: UploadFile, handler: HandlerDep
) -> StreamingResponse:
    """
    Transcribes an uploaded recording, streaming progress as NDJSON.

    Every progress message becomes one ``progress`` line, followed by a
    single ``result`` or ``error`` line.
    """
    mime_type = normalize_mime_type(file.filename, file.content_type)
    # The upload may be closed once this function returns, so copy it.
    spool, size = await _spool_upload(file)
    source = FileSource(spool, size)
    logger.info(
        "Received streaming transcription request",
        extra={"file_name": file.filename, "mime_type": mime_type},
    )

    events: asyncio.Queue[BaseModel | None] = asyncio.Queue()

    def on_progress(message: str) -> None:
        events.put_nowait(ProgressEvent(message=message))

    async def run() -> None:
        try:
            outcome = await handler.transcribe(source, mime_type, on_progress)
            events.put_nowait(_final_event(outcome))
        finally:
            events.put_nowait(None)

    async def lines() -> AsyncIterator[str]:
        task = asyncio.create_task(run())
        try:
            while (event := await events.get()) is not None:
                yield event.model_dump_json() + "\n"
        finally:
            await task

    return StreamingResponse(
        lines(),
        media_type="application/x-ndjson",
        background=BackgroundTask(spool.close),
    )


def _final_event(outcome: TranscriptionOutcome) -> BaseModel:
    if outcome.success:
        return ResultEvent(
            transcript=outcome.transcript, segment_count=outcome.segment_count
        )
    return ErrorEvent(error_kind=outcome.error_kind, message=outcome.message)


async def _spool_upload(
    file: UploadFile,
) -> tuple[tempfile.SpooledTemporaryFile, int]:
    """Copies an upload into a temp file owned by the streaming response."""
    spool = tempfile.SpooledTemporaryFile(max_size=_SPOOL_MAX_BYTES)
    size = 0
    while chunk := await file.read(_COPY_CHUNK_BYTES):
        spool.write(chunk)
        size += len(chunk)
    return spool, size
