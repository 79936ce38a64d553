"""Bounded-concurrency dispatch of segment transcriptions."""

import asyncio
from collections.abc import Awaitable, Callable, Sequence

from chunked_transcriber.domain.models import ProgressCallback, Segment, SegmentResult
from chunked_transcriber.exceptions import SegmentTranscriptionError
from chunked_transcriber.logging import setup_logging

logger = setup_logging()

TranscribeFn = Callable[[Segment], Awaitable[SegmentResult]]


def partition_batches(
    segments: Sequence[Segment], batch_size: int
) -> list[list[Segment]]:
    """Splits segments into consecutive batches of at most ``batch_size``."""
    if batch_size < 1:
        raise ValueError("batch_size must be at least 1")
    return [
        list(segments[i : i + batch_size]) for i in range(0, len(segments), batch_size)
    ]


class BatchScheduler:
    """
    Runs segment transcriptions in sequential batches.

    Each batch holds at most ``concurrency_limit`` segments, all dispatched
    at once. The next batch starts only after the current one has fully
    succeeded, so peak in-flight calls never exceed the limit.
    """

    def __init__(self, concurrency_limit: int):
        if concurrency_limit < 1:
            raise ValueError("concurrency_limit must be at least 1")
        self._concurrency_limit = concurrency_limit
        # Abandoned segment tasks, referenced until they finish.
        self._abandoned: set[asyncio.Task] = set()

    @property
    def concurrency_limit(self) -> int:
        return self._concurrency_limit

    async def run(
        self,
        segments: Sequence[Segment],
        transcribe: TranscribeFn,
        on_progress: ProgressCallback,
    ) -> list[SegmentResult]:
        """
        Transcribes all segments batch by batch.

        Args:
            segments: Segments in source order.
            transcribe: Coroutine function producing a result for one segment.
            on_progress: Receives a status message before each batch.

        Returns:
            Results for every segment, in no particular order.

        Raises:
            SegmentTranscriptionError: The first segment failure, preferred
                over other errors raised in the same batch.
            Exception: Any other failure when no segment failure is known.
                In-flight siblings finish in the background and their
                results are discarded.
        """
        total = len(segments)
        results: list[SegmentResult] = []

        for batch in partition_batches(segments, self._concurrency_limit):
            first, last = batch[0].position, batch[-1].position
            on_progress(f"Обработка частей {first}-{last} из {total}...")
            logger.info(
                "Dispatching batch",
                extra={"first": first, "last": last, "total": total},
            )
            results.extend(await self._run_batch(batch, transcribe))

        return results

    async def _run_batch(
        self, batch: list[Segment], transcribe: TranscribeFn
    ) -> list[SegmentResult]:
        tasks = {
            asyncio.create_task(transcribe(segment)): segment for segment in batch
        }
        try:
            done, pending = await asyncio.wait(
                tasks, return_when=asyncio.FIRST_EXCEPTION
            )
        except asyncio.CancelledError:
            logger.warning(
                "Batch cancelled, abandoning in-flight segments",
                extra={"segments": [s.position for s in batch]},
            )
            self._abandon(tasks)
            raise

        failed = [task for task in done if task.exception() is not None]
        if failed:
            self._abandon(pending)
            segment_failures = [
                task
                for task in failed
                if isinstance(task.exception(), SegmentTranscriptionError)
            ]
            first_failure = min(
                segment_failures or failed, key=lambda task: tasks[task].index
            )
            raise first_failure.exception()

        return [task.result() for task in done]

    def _abandon(self, tasks) -> None:
        for task in tasks:
            self._abandoned.add(task)
            task.add_done_callback(self._observe)

    def _observe(self, task: asyncio.Task) -> None:
        """Retrieves the outcome of an abandoned task so it is never left unobserved."""
        self._abandoned.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.info(
                "Discarded failure from in-flight segment",
                extra={"error": str(task.exception())},
            )
