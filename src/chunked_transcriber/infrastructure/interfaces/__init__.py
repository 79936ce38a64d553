"""Infrastructure interface exports."""

from .segment_transcriber import SegmentTranscriber

__all__ = ["SegmentTranscriber"]
