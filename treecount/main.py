"""
FastAPI application entry point.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from treecount.config import settings
from treecount.api.dependencies import get_tree_count_service, limiter
from treecount.middleware.error_handler import ErrorHandlerMiddleware
from treecount.api.v1.routers import events, trees

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Starts tracking on startup and drops all tracked state on shutdown.
    """
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Log level: {settings.log_level}")
    logger.info(f"Guarded regions: {sorted(settings.guarded_region_ids)}")
    logger.info(f"Debug overlays: facing_tree={settings.render_facing_tree}, "
                f"tree_tiles={settings.render_tree_tiles}")
    service = get_tree_count_service()
    service.start()

    yield

    # Shutdown
    logger.info("Shutting down application...")
    service.stop()
    logger.info("Shutdown complete")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Live woodcutting tree counts

    A game host pushes world events (object and player spawns, animation
    changes, ticks, reloads) and a renderer reads back how many players are
    chopping each tree.

    ## How choppers are detected

    The game never says which tree a player cuts. A player counts as chopping
    a tree when:
    1. They play one of the woodcutting animations
    2. The tile directly in front of them belongs to the tree

    Facing directions are polled every tick, so a player who turns away or
    stops chopping is removed from the count on the next tick.
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# Add rate limiter to app state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Add CORS middleware with configurable origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add global error handling middleware
app.add_middleware(ErrorHandlerMiddleware)

# Include routers
app.include_router(events.router, prefix="/api/v1")
app.include_router(trees.router, prefix="/api/v1")


@app.get("/", tags=["health"])
async def root():
    """
    Root endpoint for health check.

    Returns:
        Status message
    """
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
    }


@app.get("/health", tags=["health"])
async def health_check():
    """
    Health check endpoint.

    Returns:
        Health status and whether tracking is running
    """
    return {
        "status": "healthy",
        "service": settings.app_name,
        "tracking": get_tree_count_service().running,
    }
