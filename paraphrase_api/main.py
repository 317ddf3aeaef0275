from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from prometheus_fastapi_instrumentator import Instrumentator

from paraphrase_api.api.v1.router import router as v1_router
from paraphrase_api.core.config import Settings, get_settings
from paraphrase_api.core.errors import ParaphraseError
from paraphrase_api.core.logging import configure_logging, get_logger
from paraphrase_api.schemas.common import ErrorResponse, HealthResponse
from paraphrase_api.services.generation import GenerationClient
from paraphrase_api.utils.trace import trace_context_middleware

GENERIC_ERROR_MESSAGE = "Something went wrong."

logger = get_logger(__name__)


async def paraphrase_error_handler(_: Request, exc: ParaphraseError):
    if exc.status_code >= 500:
        logger.error("paraphrase_failed", error=exc.message, kind=type(exc).__name__)
    return ORJSONResponse(status_code=exc.status_code, content=ErrorResponse(error=exc.message).model_dump())


async def unhandled_exception_middleware(request: Request, call_next):
    # Runs inside the trace middleware so the 500 still gets its trace id.
    try:
        return await call_next(request)
    except Exception as exc:
        logger.exception("unhandled_exception", error=str(exc))
        return ORJSONResponse(
            status_code=500,
            content=ErrorResponse(error=str(exc) or GENERIC_ERROR_MESSAGE).model_dump(),
        )


def create_app(settings: Settings) -> FastAPI:
    if settings.sentry_dsn:
        sentry_sdk.init(dsn=settings.sentry_dsn, environment=settings.environment)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "startup_complete",
            environment=settings.environment,
            model=settings.gemini_model,
            api_prefix=settings.api_prefix,
        )
        yield

    app = FastAPI(title=settings.app_name, default_response_class=ORJSONResponse, lifespan=lifespan)
    app.state.settings = settings
    app.state.generation_client = GenerationClient.from_settings(settings)

    app.middleware("http")(unhandled_exception_middleware)
    app.middleware("http")(trace_context_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_origin_regex=settings.cors_origin_regex,
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ParaphraseError, paraphrase_error_handler)

    if settings.metrics_enabled:
        Instrumentator().instrument(app).expose(app, include_in_schema=False)

    @app.get("/healthz", response_model=HealthResponse)
    async def healthz() -> HealthResponse:
        return HealthResponse(status="ok")

    app.include_router(v1_router, prefix=settings.api_prefix)
    return app


configure_logging()
app = create_app(get_settings())
