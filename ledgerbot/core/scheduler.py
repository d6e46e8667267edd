# -*- coding: utf-8 -*-
from __future__ import annotations

import logging
from apscheduler.schedulers.asyncio import AsyncIOScheduler

from ledgerbot.services.dedup import DuplicateFilter

log = logging.getLogger(__name__)

SWEEP_INTERVAL_SEC = 60


def start_scheduler(dedup: DuplicateFilter) -> AsyncIOScheduler:
    """Вызывать внутри работающего event loop."""
    scheduler = AsyncIOScheduler()

    @scheduler.scheduled_job("interval", seconds=SWEEP_INTERVAL_SEC, id="dedup_sweep")
    async def sweep_dedup() -> None:
        evicted = dedup.evict_expired()
        if evicted:
            log.debug("dedup evicted=%s left=%s", evicted, len(dedup))

    scheduler.start()
    log.info("Scheduler started")
    return scheduler
