"""Shared fixtures and fakes for transcription tests."""

import asyncio

import pytest

from chunked_transcriber.config import ChunkingConfig
from chunked_transcriber.domain import (
    BatchScheduler,
    InMemorySource,
    Segment,
    SegmentResult,
    TranscriptAssembler,
    split_source,
)
from chunked_transcriber.exceptions import SegmentTranscriptionError
from chunked_transcriber.handlers import TranscriptionHandler
from chunked_transcriber.infrastructure.interfaces import SegmentTranscriber


class FakeTranscriber(SegmentTranscriber):
    """In-process transcriber that records concurrency and call order."""

    def __init__(
        self,
        texts: dict[int, str] | None = None,
        fail_at: set[int] | None = None,
        delay: float = 0.01,
        fail_delay: float | None = None,
    ):
        self.texts = texts or {}
        self.fail_at = fail_at or set()
        self.delay = delay
        self.fail_delay = delay if fail_delay is None else fail_delay
        self.calls: list[int] = []
        self.completed: list[int] = []
        self.totals: list[int] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def transcribe(self, segment: Segment, total_segments: int) -> SegmentResult:
        self.calls.append(segment.index)
        self.totals.append(total_segments)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if segment.index in self.fail_at:
                await asyncio.sleep(self.fail_delay)
                raise SegmentTranscriptionError(segment.position)
            await asyncio.sleep(self.delay)
            self.completed.append(segment.index)
            return SegmentResult(
                index=segment.index,
                text=self.texts.get(segment.index, f"text{segment.index}"),
            )
        finally:
            self.in_flight -= 1


def make_segments(count: int, segment_bytes: int = 4) -> list[Segment]:
    source = InMemorySource(bytes(count * segment_bytes))
    return split_source(source, segment_bytes, "audio/mp4")


@pytest.fixture
def settings() -> ChunkingConfig:
    return ChunkingConfig(max_segment_bytes=4, concurrency_limit=3)


@pytest.fixture
def make_handler(settings):
    def _make(transcriber: SegmentTranscriber, config: ChunkingConfig = settings):
        return TranscriptionHandler(
            transcriber,
            BatchScheduler(config.concurrency_limit),
            TranscriptAssembler(),
            config,
        )

    return _make
