from contextlib import asynccontextmanager

from fastapi import FastAPI

from social_llm.config import ConfigStore, settings
from social_llm.generation.client import GenerationClient
from social_llm.logging_config import setup_logging
from social_llm.routers import events
from social_llm.routers import settings as settings_router
from social_llm.services.dedup import ProcessedSet
from social_llm.services.interceptor import EventInterceptor
from social_llm.services.notifications import NotificationLog
from social_llm.services.play_log import PlayLog


def build_state(app: FastAPI, client: GenerationClient | None = None) -> EventInterceptor:
    """Wire play log -> interceptor -> notification log onto ``app.state``."""
    app.state.config_store = ConfigStore(settings.generation_config())
    app.state.play_log = PlayLog()
    app.state.notifications = NotificationLog()
    app.state.client = client or GenerationClient()
    app.state.interceptor = EventInterceptor(
        config_store=app.state.config_store,
        client=app.state.client,
        sink=app.state.notifications,
        processed=ProcessedSet(
            max_entries=settings.DEDUP_MAX_ENTRIES,
            ttl_seconds=settings.DEDUP_TTL_SECONDS,
        ),
    )
    app.state.interceptor.attach(app.state.play_log)
    return app.state.interceptor


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)
    if not hasattr(app.state, "interceptor"):
        build_state(app)
    yield
    # Shutdown
    await app.state.interceptor.drain()
    await app.state.client.close()


async def health_check():
    return {"status": "ok", "service": "social-interaction-llm"}


def create_app() -> FastAPI:
    app = FastAPI(
        title="Social Interaction LLM",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.include_router(events.router)
    app.include_router(settings_router.router)
    app.add_api_route("/health", health_check, methods=["GET"])
    return app


app = create_app()
