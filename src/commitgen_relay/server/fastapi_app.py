"""FastAPI relay between git tooling and the Gemini API.

Endpoints:
- GET /
- GET /health
- POST /generate  { "diff": "..." }
"""
from __future__ import annotations
import logging

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from commitgen_relay.common.config import Settings, load_settings
from commitgen_relay.common.errors import (
    InvalidInputError,
    PayloadTooLargeError,
    RelayError,
    UpstreamError,
)
from commitgen_relay.common.schema import ErrorOut, GenerateIn, GenerateOut
from commitgen_relay.common.templates import PLACEHOLDER, load_template
from commitgen_relay.server.generator import CommitMessageGenerator
from commitgen_relay.upstream.gemini import GeminiClient

LOGGER = logging.getLogger("commitgen.server.app")

def _error(exc: RelayError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.public_message})

def get_generator(request: Request) -> CommitMessageGenerator:
    return request.app.state.generator

def create_app(
    settings: Settings | None = None,
    generator: CommitMessageGenerator | None = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Runtime settings; read from the environment when omitted.
        generator: Pre-built generator, e.g. one wrapping a fake upstream.
            By default a GeminiClient is created here and reused by every
            request until shutdown.
    """
    settings = settings or load_settings()
    if generator is None:
        template = load_template(settings.template_path)
        generator = CommitMessageGenerator(GeminiClient(settings), template)

    app = FastAPI(title="commitgen-relay")
    app.state.settings = settings
    app.state.generator = generator

    @app.middleware("http")
    async def _limit_body_size(request: Request, call_next):  # noqa: ANN001, ANN202
        length = request.headers.get("content-length")
        if length is not None and length.isdigit() and int(length) > settings.max_body_bytes:
            return _error(PayloadTooLargeError())
        return await call_next(request)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RelayError)
    async def _relay_error(request: Request, exc: RelayError) -> JSONResponse:
        return _error(exc)

    @app.exception_handler(RequestValidationError)
    async def _invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _error(InvalidInputError())

    @app.on_event("startup")
    def _check_startup() -> None:
        """Warn about configuration that will make every request fail."""
        if not settings.api_key:
            LOGGER.warning("GEMINI_API_KEY is not set; /generate will return 500")
        if PLACEHOLDER not in generator.template:
            LOGGER.warning("Prompt template has no %s placeholder; diff will be appended", PLACEHOLDER)

    @app.on_event("shutdown")
    async def _close_upstream() -> None:
        await app.state.generator.aclose()

    @app.get("/", response_class=PlainTextResponse)
    def root() -> str:
        return "Commit message generator is running."

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok", "model": settings.model}

    @app.post(
        "/generate",
        response_model=GenerateOut,
        responses={400: {"model": ErrorOut}, 413: {"model": ErrorOut}, 500: {"model": ErrorOut}},
    )
    async def generate(
        body: GenerateIn,
        gen: CommitMessageGenerator = Depends(get_generator),
    ) -> GenerateOut:
        try:
            message = await gen.generate(body.diff)
        except InvalidInputError:
            raise
        except Exception as e:
            LOGGER.exception("Commit message generation failed: %s", e)
            raise UpstreamError() from e
        return GenerateOut(message=message)

    return app
