import contextlib
from contextlib import asynccontextmanager
import asyncio
import logging
from pathlib import Path

from catresume.core.config import settings
from catresume.services.upload import purge_stale_uploads

logger = logging.getLogger(__name__)

PURGE_INTERVAL_S = 600


@asynccontextmanager
async def lifespan(app):
    Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)
    Path(settings.audio_dir).mkdir(parents=True, exist_ok=True)

    stop_event = asyncio.Event()

    async def periodic_purge() -> None:
        while not stop_event.is_set():
            try:
                removed = purge_stale_uploads(settings.upload_dir, settings.upload_retention_minutes)
                if removed:
                    logger.info("stale_upload_purge removed=%s", removed)
            except Exception as exc:  # pragma: no cover
                logger.warning("stale_upload_purge_failed: %s", exc)
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=PURGE_INTERVAL_S)
            except asyncio.TimeoutError:
                continue

    purge_task = asyncio.create_task(periodic_purge())
    yield
    stop_event.set()
    if not purge_task.done():
        purge_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await purge_task
