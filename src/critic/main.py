import logging
import time
from typing import Optional

from fastapi import FastAPI, Request

from critic import __version__
from critic.common.logging_config import (
    HEALTH_PATHS,
    generate_request_id,
    set_request_id,
    setup_logging,
)
from critic.config import Settings
from critic.critique.invoker import CompletionInvoker
from critic.critique.pipeline import CritiquePipeline
from critic.critique.routes import router as critique_router
from critic.health import router as health_router
from critic.samples.routes import router as samples_router
from critic.samples.store import SampleStore, load_sample_store

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    pipeline: Optional[CritiquePipeline] = None,
    sample_store: Optional[SampleStore] = None,
) -> FastAPI:
    """
    Build the Critic application.

    Configuration is read once here and handed to the pipeline; tests pass
    their own settings, pipeline or sample store instead of touching the
    process environment.
    """
    settings = settings or Settings()
    setup_logging(settings.LOG_LEVEL)

    config = settings.critique_config()
    if not config.has_credential:
        logger.warning("HF_TOKEN is not set, critique requests will fail until it is configured")

    app = FastAPI(
        title="Critic",
        description="Automated critiques of buggy solutions to coding problems",
        version=__version__,
    )
    app.state.critique_pipeline = pipeline or CritiquePipeline(CompletionInvoker(config))
    app.state.sample_store = (
        sample_store if sample_store is not None else load_sample_store(settings.SAMPLES_PATH)
    )

    @app.middleware("http")
    async def request_logging_middleware(request: Request, call_next):
        """Assign a correlation id to every request and log its outcome."""
        request_id = generate_request_id()
        set_request_id(request_id)
        request.state.request_id = request_id

        path = request.url.path
        should_log = path not in HEALTH_PATHS
        start_time = time.perf_counter()

        if should_log:
            logger.debug("Request started | method=%s path=%s", request.method, path)

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                "Request failed | method=%s path=%s | duration=%dms | error=%s",
                request.method,
                path,
                duration_ms,
                str(e),
            )
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        if should_log:
            logger.info(
                "Request completed | method=%s path=%s status=%d | duration=%dms",
                request.method,
                path,
                response.status_code,
                duration_ms,
            )
        return response

    app.include_router(health_router)
    app.include_router(critique_router)
    app.include_router(samples_router)

    @app.get("/", include_in_schema=False)
    async def root():
        return {"message": "Critic service is running"}

    return app


app = create_app()
