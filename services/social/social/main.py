import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from social.clients.moderation import ModerationClient
from social.clients.trip import TripServiceClient
from social.comments.router import router as comments_router
from social.database import create_tables, init_db
from social.dependencies import get_settings
from social.events.publishers import EventPublisher
from social.likes.router import router as likes_router
from tripshared.database import get_redis_client
from tripshared.logging import configure_logging
from tripshared.middleware import error_envelope_middleware, request_id_middleware

logger = logging.getLogger(__name__)

# Tag descriptions shown in /docs
_OPENAPI_TAGS = [
    {
        "name": "Comments",
        "description": (
            "Threaded comments on trip media. Root comments notify the media owner, "
            "replies notify the parent's author. Every text passes moderation first."
        ),
    },
    {
        "name": "Likes",
        "description": "One like per user per media item, with counts and a per-user check.",
    },
    {
        "name": "Health",
        "description": "Liveness probe.",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    configure_logging(settings.log_level)

    init_db(settings.social_database_url)
    if settings.auto_create_tables:
        await create_tables()

    redis_client = get_redis_client(settings.redis_url) if settings.events_enabled else None
    http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(
            settings.oracle_timeout_seconds,
            connect=settings.oracle_connect_timeout_seconds,
        )
    )
    publisher = EventPublisher(redis_client, settings)

    app.state.trip_client = TripServiceClient(settings.trip_service_url, http_client)
    app.state.moderation_client = ModerationClient(settings.moderation_service_url, http_client)
    app.state.event_publisher = publisher
    logger.info("Social service started (env=%s)", settings.env_name)

    yield

    await publisher.aclose()
    await http_client.aclose()
    if redis_client is not None:
        await redis_client.aclose()


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title="Trip Social Service",
        description=(
            "Comments and likes on trip media, with notification and audit "
            "events published to Redis streams."
        ),
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_tags=_OPENAPI_TAGS,
        lifespan=lifespan,
    )

    # Added first, so it sits innermost of the user middleware.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        max_age=600,
    )
    # request_id is outermost so the envelope's error log still carries the id.
    app.middleware("http")(error_envelope_middleware)
    app.middleware("http")(request_id_middleware)

    app.include_router(comments_router, prefix="/api/v1")
    app.include_router(likes_router, prefix="/api/v1")

    @app.get("/health", tags=["Health"])
    async def health() -> dict:
        """Liveness only: no database, Redis or oracle round-trips."""
        return {"status": "ok", "service": "social"}

    return app


app = create_app()
