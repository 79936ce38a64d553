"""Core business logic for transcript assembly."""

from collections.abc import Iterable

from chunked_transcriber.domain.models import SegmentResult

SEGMENT_SEPARATOR = "\n\n"


class TranscriptAssembler:
    """Restores segment order and joins segment texts into one transcript."""

    def assemble(self, results: Iterable[SegmentResult]) -> str:
        """
        Joins segment texts in source order.

        Results may arrive in any order; only ``index`` decides placement.
        Empty texts still contribute their separators.
        """
        ordered = sorted(results, key=lambda r: r.index)
        return SEGMENT_SEPARATOR.join(r.text for r in ordered)
