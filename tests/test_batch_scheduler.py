"""Tests for batch-sequential dispatch under a concurrency ceiling."""

import asyncio
import gc

import pytest

from chunked_transcriber.domain import BatchScheduler, SegmentResult, partition_batches
from chunked_transcriber.exceptions import SegmentTranscriptionError
from tests.conftest import FakeTranscriber, make_segments


def test_partition_keeps_order_across_batches():
    segments = make_segments(7)

    batches = partition_batches(segments, 3)

    assert [[s.index for s in b] for b in batches] == [[0, 1, 2], [3, 4, 5], [6]]


def test_partition_rejects_zero_batch_size():
    with pytest.raises(ValueError):
        partition_batches(make_segments(2), 0)


def test_scheduler_rejects_zero_limit():
    with pytest.raises(ValueError):
        BatchScheduler(0)


async def test_seven_segments_run_in_three_batches_with_at_most_three_in_flight():
    segments = make_segments(7)
    transcriber = FakeTranscriber()
    progress: list[str] = []

    results = await BatchScheduler(3).run(
        segments, lambda s: transcriber.transcribe(s, len(segments)), progress.append
    )

    assert sorted(r.index for r in results) == list(range(7))
    assert transcriber.max_in_flight == 3
    assert progress == [
        "Обработка частей 1-3 из 7...",
        "Обработка частей 4-6 из 7...",
        "Обработка частей 7-7 из 7...",
    ]


async def test_next_batch_waits_for_previous_batch():
    segments = make_segments(4)
    started: list[int] = []
    finished: list[int] = []

    async def transcribe(segment):
        started.append(segment.index)
        # A later batch must not start before every earlier segment finished.
        assert all(i in finished for i in range(segment.index - segment.index % 2))
        await asyncio.sleep(0.01 * (2 - segment.index % 2))
        finished.append(segment.index)
        return SegmentResult(index=segment.index, text="")

    await BatchScheduler(2).run(segments, transcribe, lambda message: None)

    assert started == [0, 1, 2, 3]


async def test_results_keep_original_indices_regardless_of_completion_order():
    segments = make_segments(3)

    async def transcribe(segment):
        await asyncio.sleep(0.03 - 0.01 * segment.index)
        return SegmentResult(index=segment.index, text=f"text{segment.index}")

    results = await BatchScheduler(3).run(segments, transcribe, lambda message: None)

    assert {r.index: r.text for r in results} == {
        0: "text0",
        1: "text1",
        2: "text2",
    }


async def test_failure_stops_later_batches():
    segments = make_segments(7)
    transcriber = FakeTranscriber(fail_at={4})
    progress: list[str] = []

    with pytest.raises(SegmentTranscriptionError) as exc_info:
        await BatchScheduler(3).run(
            segments,
            lambda s: transcriber.transcribe(s, len(segments)),
            progress.append,
        )

    assert exc_info.value.position == 5
    assert 6 not in transcriber.calls
    assert len(progress) == 2


async def test_failure_propagates_before_siblings_finish():
    segments = make_segments(3)
    transcriber = FakeTranscriber(fail_at={1}, delay=0.05, fail_delay=0)

    with pytest.raises(SegmentTranscriptionError):
        await BatchScheduler(3).run(
            segments,
            lambda s: transcriber.transcribe(s, len(segments)),
            lambda message: None,
        )

    assert transcriber.completed == []
    await asyncio.sleep(0.1)
    assert sorted(transcriber.completed) == [0, 2]


async def test_lowest_failed_index_is_reported():
    segments = make_segments(3)
    transcriber = FakeTranscriber(fail_at={0, 2}, delay=0.01, fail_delay=0)

    with pytest.raises(SegmentTranscriptionError) as exc_info:
        await BatchScheduler(3).run(
            segments,
            lambda s: transcriber.transcribe(s, len(segments)),
            lambda message: None,
        )

    assert exc_info.value.position == 1


async def test_segment_failure_is_preferred_over_other_errors():
    segments = make_segments(3)

    async def transcribe(segment):
        await asyncio.sleep(0)
        if segment.index == 0:
            raise KeyError("malformed response")
        if segment.index == 1:
            raise SegmentTranscriptionError(segment.position)
        await asyncio.sleep(0.01)
        return SegmentResult(index=segment.index, text="")

    with pytest.raises(SegmentTranscriptionError) as exc_info:
        await BatchScheduler(3).run(segments, transcribe, lambda message: None)

    assert exc_info.value.position == 2


async def test_cancelled_batch_leaves_no_segment_unobserved():
    loop = asyncio.get_running_loop()
    reported: list[dict] = []
    loop.set_exception_handler(lambda loop, context: reported.append(context))
    segments = make_segments(3)
    transcriber = FakeTranscriber(fail_at={0, 1, 2}, fail_delay=0.05)
    scheduler = BatchScheduler(3)

    try:
        run = asyncio.create_task(
            scheduler.run(
                segments,
                lambda s: transcriber.transcribe(s, len(segments)),
                lambda message: None,
            )
        )
        await asyncio.sleep(0.01)
        run.cancel()
        with pytest.raises(asyncio.CancelledError):
            await run

        await asyncio.sleep(0.1)
        gc.collect()
        await asyncio.sleep(0)
    finally:
        loop.set_exception_handler(None)

    assert reported == []
    assert transcriber.in_flight == 0
    assert scheduler._abandoned == set()
