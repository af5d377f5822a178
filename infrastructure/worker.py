"""Blob migration and backup worker process.

Runs one blob migration at start-up (when MIGRATE_ON_STARTUP is set), then
keeps the database backup scheduler running until SIGINT/SIGTERM.

Start with: python -m infrastructure.worker
"""

from __future__ import annotations

import asyncio
import signal
from typing import TYPE_CHECKING

import structlog
from returns.result import Failure

from application.use_cases.backup_use_cases import RunBackupUseCase
from application.use_cases.migration_use_cases import MigrateBlobsUseCase
from domain.exceptions import ValidationError
from infrastructure.config import settings
from infrastructure.di.container import create_container
from infrastructure.logging import setup_logging
from infrastructure.scheduling.interval_scheduler import IntervalScheduler

if TYPE_CHECKING:
    from lagom import Container

setup_logging("worker")
logger = structlog.get_logger()

SECONDS_PER_HOUR = 3600


async def run_startup_migration(container: Container) -> None:
    """Run the blob migration once, the way the relay does at boot."""
    try:
        use_case = container[MigrateBlobsUseCase]
    except ValidationError as e:
        logger.error("startup_migration_misconfigured", error=str(e))  # noqa: TRY400
        return

    result = await asyncio.to_thread(use_case.execute)
    if isinstance(result, Failure):
        logger.error("startup_migration_failed", error=str(result.failure()))


def make_backup_job(use_case: RunBackupUseCase):  # noqa: ANN201
    def job() -> None:
        result = use_case.execute()
        if isinstance(result, Failure):
            logger.error("backup_run_failed", error=str(result.failure()))

    return job


async def run() -> None:
    logger.info("worker_starting", env=settings.app_env)

    container = create_container()

    if settings.migrate_on_startup:
        await run_startup_migration(container)
    else:
        logger.info("startup_migration_disabled")

    if not settings.backup_enabled:
        logger.info("backup_disabled", reason="no backup provider set")
        return

    try:
        backup_use_case = container[RunBackupUseCase]
    except ValidationError as e:
        logger.error("backup_misconfigured", provider=settings.backup_provider, error=str(e))  # noqa: TRY400
        return

    scheduler = IntervalScheduler(
        settings.backup_interval_hours * SECONDS_PER_HOUR,
        make_backup_job(backup_use_case),
        name="database_backup",
    )

    def handle_signal(signum: int) -> None:
        logger.info("worker_signal_received", signum=signum)
        asyncio.get_running_loop().create_task(scheduler.stop())

    loop = asyncio.get_running_loop()
    for signum in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(signum, handle_signal, signum)

    await scheduler.start()
    await scheduler.wait()
    logger.info("worker_stopped")


if __name__ == "__main__":
    asyncio.run(run())
