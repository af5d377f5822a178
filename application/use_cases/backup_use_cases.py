from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from returns.result import Failure, Result, Success

from application.dtos.backup_dtos import BackupResponse
from application.dtos.errors import AppError
from domain.exceptions import InfrastructureError, ValidationError

if TYPE_CHECKING:
    from pathlib import Path

    from application.ports.backup_archiver import BackupArchiver
    from application.ports.backup_uploader import BackupUploader

logger = structlog.get_logger()


class RunBackupUseCase:
    """Archive the database directory, upload the archive and remove the local copy."""

    def __init__(
        self,
        archiver: BackupArchiver,
        uploader: BackupUploader,
        source_dir: Path,
        archive_path: Path,
    ) -> None:
        self.archiver = archiver
        self.uploader = uploader
        self.source_dir = source_dir
        self.archive_path = archive_path

    def execute(self) -> Result[BackupResponse, AppError]:
        try:
            archive = self.archiver.archive(self.source_dir, self.archive_path)
            size_bytes = archive.stat().st_size
            logger.info(
                "backup_archive_created",
                source_dir=str(self.source_dir),
                archive=str(archive),
                size_bytes=size_bytes,
            )

            try:
                target_url = self.uploader.upload(archive)
            finally:
                archive.unlink(missing_ok=True)

            logger.info("backup_uploaded", archive=archive.name, target_url=target_url)
            return Success(
                BackupResponse(
                    archive_name=archive.name,
                    target_url=target_url,
                    size_bytes=size_bytes,
                ),
            )
        except ValidationError as e:
            return Failure(AppError("validation", f"Backup misconfigured: {e!s}"))
        except (InfrastructureError, OSError) as e:
            logger.error("backup_failed", error=str(e))  # noqa: TRY400
            return Failure(AppError("backup_error", f"Failed to back up database: {e!s}"))
