"""Handler orchestrating chunked transcription of a recording."""

from chunked_transcriber.config import ChunkingConfig
from chunked_transcriber.domain import (
    BatchScheduler,
    ByteSource,
    ErrorKind,
    ProgressCallback,
    Segment,
    SegmentResult,
    TranscriptAssembler,
    TranscriptionOutcome,
    segment_count,
    split_source,
)
from chunked_transcriber.exceptions import SegmentTranscriptionError
from chunked_transcriber.infrastructure.interfaces import SegmentTranscriber
from chunked_transcriber.logging import setup_logging

logger = setup_logging()

EMPTY_INPUT_MESSAGE = "Файл пуст."
GENERIC_FAILURE_MESSAGE = "Произошла ошибка при обработке."


def _segment_failure_message(position: int) -> str:
    return f"Ошибка при обработке части {position}. Попробуйте снова."


class TranscriptionHandler:
    """Splits a recording, transcribes its segments and assembles the result."""

    def __init__(
        self,
        transcriber: SegmentTranscriber,
        scheduler: BatchScheduler,
        assembler: TranscriptAssembler,
        settings: ChunkingConfig,
    ):
        self._transcriber = transcriber
        self._scheduler = scheduler
        self._assembler = assembler
        self._settings = settings

    async def transcribe(
        self,
        source: ByteSource,
        mime_type: str,
        on_progress: ProgressCallback | None = None,
    ) -> TranscriptionOutcome:
        """
        Transcribes a whole recording.

        Args:
            source: The recording bytes.
            mime_type: MIME type sent with every segment, used as given.
            on_progress: Optional sink for human-readable status messages.

        Returns:
            TranscriptionOutcome holding the transcript, or a failure naming
            the segment that failed when it is known.
        """
        notify = self._progress_notifier(on_progress)
        total = segment_count(source.size, self._settings.max_segment_bytes)

        logger.info(
            "Transcription started",
            extra={
                "size": source.size,
                "mime_type": mime_type,
                "segments": total,
            },
        )

        if total == 0:
            logger.warning("Empty recording rejected")
            return TranscriptionOutcome.failed(ErrorKind.EMPTY_INPUT, EMPTY_INPUT_MESSAGE)

        notify(f"Подготовка файла: разбиение на {total} частей...")
        segments = split_source(source, self._settings.max_segment_bytes, mime_type)

        async def transcribe_segment(segment: Segment) -> SegmentResult:
            return await self._transcriber.transcribe(segment, total)

        try:
            results = await self._scheduler.run(segments, transcribe_segment, notify)
        except SegmentTranscriptionError as e:
            logger.error(
                "Transcription aborted",
                extra={"position": e.position, "segments": total},
            )
            return TranscriptionOutcome.failed(
                ErrorKind.SEGMENT_TRANSCRIPTION,
                _segment_failure_message(e.position),
                segment_count=total,
            )
        except Exception:
            logger.exception("Transcription failed", extra={"segments": total})
            return TranscriptionOutcome.failed(
                ErrorKind.UNEXPECTED, GENERIC_FAILURE_MESSAGE, segment_count=total
            )

        notify("Сборка финального текста...")
        transcript = self._assembler.assemble(results)

        logger.info(
            "Transcription completed",
            extra={"segments": total, "chars": len(transcript)},
        )
        return TranscriptionOutcome.succeeded(transcript, segment_count=total)

    def _progress_notifier(self, on_progress: ProgressCallback | None) -> ProgressCallback:
        """Wraps the caller's sink so a faulty sink cannot abort transcription."""

        def notify(message: str) -> None:
            logger.info("Progress", extra={"progress": message})
            if on_progress is None:
                return
            try:
                on_progress(message)
            except Exception:
                logger.exception("Progress callback failed")

        return notify
