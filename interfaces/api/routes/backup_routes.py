from collections.abc import Container
from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.concurrency import run_in_threadpool

from application.dtos.backup_dtos import BackupResponse
from application.use_cases.backup_use_cases import RunBackupUseCase
from interfaces.api.middleware import handle_use_case_errors
from interfaces.dependencies import get_container

router = APIRouter(prefix="/backups", tags=["backups"])


@router.post("", status_code=status.HTTP_201_CREATED)
@handle_use_case_errors
async def run_backup(
    container: Annotated[Container, Depends(get_container)],
) -> BackupResponse:
    """Archive the database directory and upload it to the configured provider."""
    use_case = container[RunBackupUseCase]
    return await run_in_threadpool(use_case.execute)
