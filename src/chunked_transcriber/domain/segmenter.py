"""Splits a byte source into ordered, size-bounded segments."""

import math

from chunked_transcriber.domain.models import Segment
from chunked_transcriber.domain.source import ByteSource


def segment_count(total_size: int, max_segment_bytes: int) -> int:
    """Number of segments needed to cover ``total_size`` bytes."""
    if max_segment_bytes <= 0:
        raise ValueError("max_segment_bytes must be positive")
    return math.ceil(total_size / max_segment_bytes)


def split_source(
    source: ByteSource, max_segment_bytes: int, mime_type: str
) -> list[Segment]:
    """
    Partitions a source into contiguous segments of at most ``max_segment_bytes``.

    The last segment holds the remainder and is never padded. An empty source
    yields no segments. No bytes are read here; segments only record ranges.

    Args:
        source: The byte source to split.
        max_segment_bytes: Upper bound on the size of each segment.
        mime_type: MIME type attached to every segment.

    Returns:
        Segments ordered by index, covering ``[0, source.size)`` exactly once.
    """
    total_size = source.size
    return [
        Segment(
            index=i,
            start=i * max_segment_bytes,
            end=min((i + 1) * max_segment_bytes, total_size),
            mime_type=mime_type,
            source=source,
        )
        for i in range(segment_count(total_size, max_segment_bytes))
    ]
