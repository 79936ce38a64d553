"""Dependency injection configuration for the transcription service."""

from functools import lru_cache

from google import genai

from chunked_transcriber.config import AppConfig, load_config
from chunked_transcriber.domain import BatchScheduler, TranscriptAssembler
from chunked_transcriber.exceptions import ConfigurationError
from chunked_transcriber.handlers import TranscriptionHandler
from chunked_transcriber.infrastructure import GeminiSegmentTranscriber
from chunked_transcriber.logging import setup_logging

logger = setup_logging()


def build_handler(config: AppConfig) -> TranscriptionHandler:
    """
    Composes a transcription handler from configuration.

    Raises:
        ConfigurationError: If the Gemini API key is missing. Checked before
            any client is created.
    """
    if not config.gemini.api_key:
        logger.error("Gemini API key is not configured")
        raise ConfigurationError("GEMINI_API_KEY", "API key is missing")

    client = genai.Client(api_key=config.gemini.api_key)
    transcriber = GeminiSegmentTranscriber(
        client, config.gemini, config.chunking.language
    )
    scheduler = BatchScheduler(config.chunking.concurrency_limit)

    logger.info(
        "Transcription handler configured",
        extra={
            "model_name": config.gemini.model_name,
            "max_segment_bytes": config.chunking.max_segment_bytes,
            "concurrency_limit": config.chunking.concurrency_limit,
        },
    )
    return TranscriptionHandler(
        transcriber, scheduler, TranscriptAssembler(), config.chunking
    )


@lru_cache
def get_handler() -> TranscriptionHandler:
    """Returns the configured transcription handler."""
    return build_handler(load_config())
