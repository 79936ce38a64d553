"""Domain layer exports."""

from .assembler import TranscriptAssembler
from .batch_scheduler import BatchScheduler, partition_batches
from .mime import normalize_mime_type
from .models import (
    ErrorKind,
    ProgressCallback,
    Segment,
    SegmentResult,
    TranscriptionOutcome,
)
from .prompts import build_transcription_prompt
from .segmenter import segment_count, split_source
from .source import ByteSource, FileSource, InMemorySource

__all__ = [
    "BatchScheduler",
    "ByteSource",
    "ErrorKind",
    "FileSource",
    "InMemorySource",
    "ProgressCallback",
    "Segment",
    "SegmentResult",
    "TranscriptAssembler",
    "TranscriptionOutcome",
    "build_transcription_prompt",
    "normalize_mime_type",
    "partition_batches",
    "segment_count",
    "split_source",
]
