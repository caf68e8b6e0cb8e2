"""chronosec: FastAPI service entry point."""

from __future__ import annotations

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor

from chronosec.ai.llm import build_llm
from chronosec.ai.router import router as ai_router
from chronosec.config import settings
from chronosec.export.router import router as export_router
from chronosec.middleware import MetricsMiddleware
from chronosec.routers import health, metrics
from chronosec.telemetry.logging import setup_logging
from chronosec.telemetry.tracing import SERVICE_VERSION, setup_tracing
from chronosec.timeline.router import router as timeline_router

logger = setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Initializing chronosec...")

    if settings.otlp_endpoint:
        setup_tracing(settings.otlp_endpoint)
        logger.info("Tracing exported to %s", settings.otlp_endpoint)

    app.state.llm = build_llm()
    if app.state.llm is None:
        logger.warning("No %s API key configured; AI endpoints will return fallbacks", settings.llm_provider)
    else:
        logger.info("LLM ready: provider=%s model=%s", settings.llm_provider, settings.llm_model)

    logger.info("chronosec ready; listening on %s:%d", settings.host, settings.port)

    yield

    logger.info("chronosec shut down")


app = FastAPI(
    title="chronosec",
    description="Compliance-aligned incident response timelines",
    version=SERVICE_VERSION,
    lifespan=lifespan,
)

app.add_middleware(MetricsMiddleware)

app.include_router(health.router)
app.include_router(metrics.router)
app.include_router(timeline_router)
app.include_router(ai_router)
app.include_router(export_router)

FastAPIInstrumentor.instrument_app(app)


def run() -> None:
    uvicorn.run("chronosec.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
