"""Gemini implementation of the SegmentTranscriber interface."""

import asyncio

from google import genai
from google.genai import types

from chunked_transcriber.config import GeminiConfig
from chunked_transcriber.domain.models import Segment, SegmentResult
from chunked_transcriber.domain.prompts import build_transcription_prompt
from chunked_transcriber.exceptions import ConfigurationError, SegmentTranscriptionError
from chunked_transcriber.logging import setup_logging

from .interfaces import SegmentTranscriber

logger = setup_logging()


class GeminiSegmentTranscriber(SegmentTranscriber):
    """Transcribes audio segments using Google Gemini."""

    def __init__(self, client: genai.Client, config: GeminiConfig, language: str):
        if not config.api_key:
            raise ConfigurationError("GEMINI_API_KEY", "API key is missing")
        self._client = client
        self._config = config
        self._language = language

    async def transcribe(self, segment: Segment, total_segments: int) -> SegmentResult:
        """
        Sends one segment to Gemini with positional instructions.

        The segment bytes are read off the event loop, then sent inline with
        their MIME type. A response without text counts as an empty segment.
        """
        prompt = build_transcription_prompt(
            segment.position, total_segments, self._language
        )
        try:
            data = await asyncio.to_thread(segment.read)
            response = await self._client.aio.models.generate_content(
                model=self._config.model_name,
                contents=[
                    prompt,
                    types.Part.from_bytes(data=data, mime_type=segment.mime_type),
                ],
                config={"temperature": self._config.temperature},
            )
            text = response.text
        except Exception as e:
            logger.exception(
                "Gemini segment transcription failed",
                extra={"position": segment.position, "total": total_segments},
            )
            raise SegmentTranscriptionError(segment.position, e) from e

        if text is None:
            logger.warning(
                "Gemini returned no text for segment",
                extra={"position": segment.position, "total": total_segments},
            )
            text = ""

        logger.info(
            "Segment transcribed",
            extra={
                "position": segment.position,
                "total": total_segments,
                "chars": len(text),
            },
        )
        return SegmentResult(index=segment.index, text=text)
