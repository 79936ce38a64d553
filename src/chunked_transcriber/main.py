"""FastAPI application entry point."""

from ddtrace import patch_all
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from chunked_transcriber.domain import ErrorKind
from chunked_transcriber.exceptions import ConfigurationError
from chunked_transcriber.logging import setup_logging
from chunked_transcriber.routes import transcriptions_router

patch_all()

logger = setup_logging()

app = FastAPI(title="Transcription Service")
app.include_router(transcriptions_router)


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(
    request: Request, exc: ConfigurationError
) -> JSONResponse:
    logger.error(
        "Service is misconfigured",
        extra={"setting": exc.setting, "path": request.url.path},
    )
    return JSONResponse(
        status_code=500,
        content={"detail": str(exc), "error_kind": ErrorKind.CONFIGURATION},
    )


@app.get("/health")
def health() -> dict[str, str]:
    """Liveness probe."""
    return {"status": "ok"}
