"""Main entry point for the CityVibes server.

Startup sequence:
1. Initialize DI container
2. Inject handlers into routers
3. Start the cache purge background job
4. Serve HTTP with FastAPI
"""
import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from cityvibes.config import Settings
from cityvibes.container import Container
from cityvibes.routers import debug_router, set_debug_dependencies, set_vibe_handler, vibe_router
from cityvibes.middleware import PrometheusMiddleware
from cityvibes.metrics import (
    BACKGROUND_JOB_RUNS_TOTAL,
    BACKGROUND_JOB_DURATION_SECONDS,
    BACKGROUND_JOB_LAST_RUN_TIMESTAMP,
)

# Configure logging
settings = Settings()
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Global container and scheduler
container: Container = None
scheduler: AsyncIOScheduler = None


async def run_cache_purge_job():
    """Background job: Drop expired translation and places cache entries."""
    job_name = "cache_purge"
    start_time = time.perf_counter()
    try:
        removed = container.purge_expired_caches()
        duration = time.perf_counter() - start_time
        BACKGROUND_JOB_DURATION_SECONDS.labels(job_name=job_name).observe(duration)
        BACKGROUND_JOB_RUNS_TOTAL.labels(job_name=job_name, status="success").inc()
        BACKGROUND_JOB_LAST_RUN_TIMESTAMP.labels(job_name=job_name).set_to_current_time()
        logger.info(f"[Scheduler] CachePurgeJob completed, removed {removed} entries")
    except Exception as e:
        duration = time.perf_counter() - start_time
        BACKGROUND_JOB_DURATION_SECONDS.labels(job_name=job_name).observe(duration)
        BACKGROUND_JOB_RUNS_TOTAL.labels(job_name=job_name, status="error").inc()
        logger.error(f"[Scheduler] CachePurgeJob failed: {e}")


def start_background_jobs(settings: Settings):
    """Start all background jobs using APScheduler."""
    global scheduler
    scheduler = AsyncIOScheduler()

    scheduler.add_job(
        run_cache_purge_job,
        trigger=IntervalTrigger(minutes=settings.cache_purge_interval_minutes),
        id="cache_purge",
        name="Expired Cache Entry Purge",
        replace_existing=True,
    )
    logger.info(
        f"[Scheduler] Scheduled cache purge every "
        f"{settings.cache_purge_interval_minutes} minutes"
    )

    scheduler.start()
    logger.info("[Scheduler] Background jobs started")


async def startup_sequence(settings: Settings):
    """Build the container, wire routers and start jobs."""
    global container

    logger.info("[Main] Starting startup sequence")

    logger.info("[Main] Initializing DI container")
    container = Container(settings)

    # Routes are registered at app creation; only the handlers are injected here
    logger.info("[Main] Injecting handlers into routers")
    set_vibe_handler(container.vibe_handler)
    set_debug_dependencies(
        container.translator,
        place_search=container.place_search_service,
        foursquare_client=container.foursquare_api,
    )

    logger.info("[Main] Starting periodic jobs")
    start_background_jobs(settings)

    logger.info("[Main] Startup sequence completed")


async def shutdown_sequence():
    """Clean up resources on shutdown."""
    global container, scheduler

    logger.info("[Main] Starting shutdown sequence")

    if scheduler:
        logger.info("[Main] Stopping scheduler")
        scheduler.shutdown(wait=False)
        logger.info("[Main] Scheduler stopped")

    if container:
        logger.info("[Main] Shutting down container")
        await container.shutdown()
        logger.info("[Main] Container shut down")

    logger.info("[Main] Shutdown sequence completed")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """FastAPI lifespan context manager for startup and shutdown."""
    await startup_sequence(Settings())
    yield
    await shutdown_sequence()


# Create FastAPI app
app = FastAPI(
    title="CityVibes API",
    description="Mood-based place recommendations",
    version="1.0.0",
    lifespan=lifespan,
)

# Add Prometheus metrics middleware
app.add_middleware(PrometheusMiddleware)

# Register routers at app creation time (before uvicorn starts)
app.include_router(vibe_router)
app.include_router(debug_router)


@app.get("/health")
def health():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/metrics", response_class=PlainTextResponse)
def metrics():
    """Prometheus metrics endpoint for scraping."""
    return PlainTextResponse(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST,
    )


if __name__ == "__main__":
    import uvicorn

    logger.info("[Main] Starting CityVibes server")
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.server_port,
        log_level=settings.log_level.lower(),
    )
