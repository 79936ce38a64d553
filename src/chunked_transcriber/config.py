"""Application configuration loaded from environment variables."""

import os

from pydantic import BaseModel, Field

DEFAULT_MAX_SEGMENT_BYTES = 10 * 1024 * 1024


class GeminiConfig(BaseModel, frozen=True):
    """Gemini transcription configuration."""

    api_key: str
    model_name: str = "gemini-2.5-flash"
    temperature: float = Field(default=0.2, ge=0.0, le=2.0)


class ChunkingConfig(BaseModel, frozen=True):
    """Segmentation and scheduling configuration."""

    max_segment_bytes: int = Field(default=DEFAULT_MAX_SEGMENT_BYTES, gt=0)
    concurrency_limit: int = Field(default=3, ge=1)
    language: str = "Russian"


class AppConfig(BaseModel, frozen=True):
    """Root application configuration."""

    gemini: GeminiConfig
    chunking: ChunkingConfig = ChunkingConfig()


def load_config() -> AppConfig:
    """Loads configuration from environment variables."""
    return AppConfig(
        gemini=GeminiConfig(
            api_key=os.getenv("GEMINI_API_KEY", ""),
            model_name=os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
            temperature=float(os.getenv("GEMINI_TEMPERATURE", "0.2")),
        ),
        chunking=ChunkingConfig(
            max_segment_bytes=int(
                os.getenv("MAX_SEGMENT_BYTES", str(DEFAULT_MAX_SEGMENT_BYTES))
            ),
            concurrency_limit=int(os.getenv("CONCURRENCY_LIMIT", "3")),
            language=os.getenv("TRANSCRIPT_LANGUAGE", "Russian"),
        ),
    )
