"""Abstract interface for segment transcription backends."""

from abc import ABC, abstractmethod

from chunked_transcriber.domain.models import Segment, SegmentResult


class SegmentTranscriber(ABC):
    """Abstract base class for remote transcription backends."""

    @abstractmethod
    async def transcribe(self, segment: Segment, total_segments: int) -> SegmentResult:
        """
        Transcribes one segment of a recording.

        Args:
            segment: The segment to transcribe, carrying its MIME type.
            total_segments: Number of segments in the whole recording.

        Returns:
            SegmentResult tagged with the segment's index.

        Raises:
            SegmentTranscriptionError: If the remote call fails.
        """
        pass
