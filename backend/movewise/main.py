import logging
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from movewise.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5


def configure_logging() -> None:
    """Console plus rotating file output; level from LOG_LEVEL."""
    log_dir = Path(settings.log_dir) if settings.log_dir else Path(__file__).resolve().parent.parent / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)

    file_handler = RotatingFileHandler(
        log_dir / "movewise.log",
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUPS,
        encoding="utf-8",
    )
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(), file_handler],
    )

    for noisy in ("httpcore", "httpx", "uvicorn.access"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


configure_logging()

from movewise.routers import chat, quotes
from movewise.services.cache_service import cache_service
from movewise.services.quote_engine import quote_engine

logger = logging.getLogger(__name__)


def report_provider_usage() -> None:
    usage = quote_engine.usage_stats()
    busiest = max(usage.items(), key=lambda kv: kv[1]["requests"], default=None)
    summary = ", ".join(f"{pid}={s['requests']}/{s['limit']}" for pid, s in usage.items())
    logger.info(f"Provider usage this window: {summary}")
    if busiest and busiest[1]["remaining"] == 0:
        logger.warning(f"Provider {busiest[0]} is at its rate limit; resets in {busiest[1]['reset_in_seconds']}s")


def _start_scheduler():
    from apscheduler.schedulers.asyncio import AsyncIOScheduler
    from apscheduler.triggers.interval import IntervalTrigger

    scheduler = AsyncIOScheduler()
    scheduler.add_job(
        report_provider_usage,
        IntervalTrigger(minutes=settings.usage_report_interval_minutes),
        id="provider_usage_report",
    )
    scheduler.start()
    logger.info(f"Usage report scheduled every {settings.usage_report_interval_minutes} min")
    return scheduler


@asynccontextmanager
async def lifespan(app: FastAPI):
    scheduler = None
    if settings.scheduler_enabled:
        try:
            scheduler = _start_scheduler()
        except Exception as e:
            logger.error(f"Scheduler failed to start: {e}")

    yield

    if scheduler:
        scheduler.shutdown(wait=False)
        logger.info("Background scheduler stopped")
    await cache_service.close()


app = FastAPI(
    title="MoveWise",
    description="Moving quote aggregation and recommendations",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(quotes.router, prefix="/api/quotes", tags=["quotes"])
app.include_router(chat.router, prefix="/api/chat", tags=["chat"])


@app.get("/health")
@app.get("/api/health")
async def health_check():
    return {"status": "ok", "service": "movewise"}
