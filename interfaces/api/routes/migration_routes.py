from collections.abc import Container
from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, status
from fastapi.concurrency import run_in_threadpool

from application.dtos.migration_dtos import MigrationReport
from application.use_cases.migration_use_cases import MigrateBlobsUseCase
from interfaces.api.middleware import handle_use_case_errors
from interfaces.dependencies import get_container

logger = structlog.get_logger()

router = APIRouter(prefix="/migrations", tags=["migrations"])


@router.post("", status_code=status.HTTP_200_OK)
@handle_use_case_errors
async def migrate_blobs(
    container: Annotated[Container, Depends(get_container)],
) -> MigrationReport:
    """Move every blob of the configured owner from the source store to the destination store.

    Returns:
        200 OK: Run finished; compare ``migrated`` with ``discovered`` to spot items needing follow-up
        503 Service Unavailable: The source index could not be read
        500 Internal Server Error: Misconfiguration or unexpected failure

    """
    use_case = container[MigrateBlobsUseCase]
    logger.info("migration_requested")
    return await run_in_threadpool(use_case.execute)
