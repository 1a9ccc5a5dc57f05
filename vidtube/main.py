"""
VidTube - Main Application Entry Point
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from vidtube import __version__
from vidtube.settings import get_settings
from vidtube.routes import videos, comments, tweets, playlists, likes, subscriptions, users
from vidtube.services.video_service import get_video_service
from vidtube.services.comment_service import get_comment_service
from vidtube.services.tweet_service import get_tweet_service
from vidtube.services.playlist_service import get_playlist_service
from vidtube.services.like_service import get_like_service
from vidtube.services.subscription_service import get_subscription_service
from vidtube.services.user_service import get_user_service

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Get settings
settings = get_settings()
logging.getLogger().setLevel(settings.log_level.upper())

# Rate limiter
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[f"{settings.rate_limit_per_minute}/minute"]
)

SERVICE_GETTERS = [
    get_video_service,
    get_comment_service,
    get_tweet_service,
    get_playlist_service,
    get_like_service,
    get_subscription_service,
    get_user_service,
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    # Startup
    logger.info(f"Starting {settings.app_name} in {settings.app_env} mode")

    from vidtube.services.database_service import get_database_service
    try:
        db = await get_database_service()
        logger.info("Database connection initialized")
        app.state.db = db

        # Inject database into every service
        for get_service in SERVICE_GETTERS:
            get_service().set_database(db)
        logger.info("Services configured with database")
    except Exception as e:
        # Services answer with dependency errors until the database is back
        logger.error(f"Failed to initialize database: {e}")

    from vidtube.services.media_service import get_media_service
    if not get_media_service().is_initialized():
        logger.warning("Media service not initialized - check MEDIA_STORE_URL")

    yield

    # Shutdown
    logger.info("Shutting down application")

    if hasattr(app.state, "db"):
        await app.state.db.close()


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Social video platform: videos, comments, tweets, playlists, likes and subscriptions",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None
)

# Add rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(videos.router, prefix="/api/videos", tags=["Videos"])
app.include_router(comments.router, prefix="/api/comments", tags=["Comments"])
app.include_router(tweets.router, prefix="/api/tweets", tags=["Tweets"])
app.include_router(playlists.router, prefix="/api/playlists", tags=["Playlists"])
app.include_router(likes.router, prefix="/api/likes", tags=["Likes"])
app.include_router(subscriptions.router, prefix="/api/subscriptions", tags=["Subscriptions"])
app.include_router(users.router, prefix="/api/users", tags=["Users"])


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "environment": settings.app_env,
        "version": __version__
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "vidtube.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug
    )
