from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from itertools import chain
from typing import TYPE_CHECKING
from uuid import uuid4

import structlog
from returns.result import Failure, Result, Success

from application.dtos.errors import AppError
from application.dtos.migration_dtos import MigrationReport, MigrationStatus
from domain.exceptions import EnumerationError
from domain.services.blob_normalization_service import BlobNormalizationService

if TYPE_CHECKING:
    from application.ports.blob_store import BlobStore
    from domain.value_objects.blob_descriptor import BlobDescriptor

logger = structlog.get_logger()


@dataclass
class MigrationRun:
    """Bookkeeping for a single run. Lives only as long as the run."""

    owner: str
    run_id: str = field(default_factory=lambda: uuid4().hex)
    started_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    discovered: int = 0
    write_failures: int = 0
    delete_failures: int = 0
    migrated: dict[str, BlobDescriptor] = field(default_factory=dict)

    def to_report(self, status: MigrationStatus) -> MigrationReport:
        return MigrationReport(
            owner=self.owner,
            run_id=self.run_id,
            status=status,
            discovered=self.discovered,
            migrated=len(self.migrated),
            write_failures=self.write_failures,
            delete_failures=self.delete_failures,
            migrated_digests=list(self.migrated),
            duration_seconds=(datetime.now(UTC) - self.started_at).total_seconds(),
        )


class MigrateBlobsUseCase:
    """Move every blob descriptor of one owner from a source store to a destination store.

    Descriptors are processed one at a time in enumeration order. A descriptor
    is deleted from the source only after the destination accepted it, so a
    failed write never loses data. A failed delete after a successful write
    leaves a duplicate in the source; the descriptor still counts as migrated
    and a later run cleans it up.

    Only a failure to enumerate the source ends a run early.
    """

    def __init__(
        self,
        source_store: BlobStore,
        destination_store: BlobStore,
        owner: str,
    ) -> None:
        self.source_store = source_store
        self.destination_store = destination_store
        self.owner = owner

    def execute(self) -> Result[MigrationReport, AppError]:
        """Run one migration for the configured owner.

        Returns:
            Result containing the run report, or an ``enumeration`` error when
            the source index could not be read

        """
        run = MigrationRun(owner=self.owner)
        with structlog.contextvars.bound_contextvars(migration_run_id=run.run_id):
            return self._run(run)

    def _run(self, run: MigrationRun) -> Result[MigrationReport, AppError]:
        try:
            descriptors = iter(self.source_store.enumerate(self.owner))
            first = next(descriptors, None)

            if first is None:
                logger.info(
                    "blob_migration_skipped",
                    owner=self.owner,
                    reason="nothing_to_migrate",
                )
                return Success(run.to_report(MigrationStatus.NOTHING_TO_MIGRATE))

            logger.info(
                "blob_migration_started",
                owner=self.owner,
                source=type(self.source_store).__name__,
                destination=type(self.destination_store).__name__,
            )

            for descriptor in chain([first], descriptors):
                run.discovered += 1
                self._migrate_one(descriptor, run)

        except EnumerationError as e:
            logger.error(  # noqa: TRY400
                "blob_migration_enumeration_failed",
                owner=self.owner,
                error=str(e),
                discovered=run.discovered,
                migrated=len(run.migrated),
            )
            return Failure(
                AppError("enumeration", f"Failed to list blobs for owner {self.owner}: {e!s}"),
            )

        report = run.to_report(MigrationStatus.COMPLETED)
        logger.info(
            "blob_migration_completed",
            owner=self.owner,
            discovered=report.discovered,
            migrated=report.migrated,
            write_failures=report.write_failures,
            delete_failures=report.delete_failures,
            duration_seconds=round(report.duration_seconds, 3),
        )
        return Success(report)

    def _migrate_one(self, descriptor: BlobDescriptor, run: MigrationRun) -> None:
        descriptor = BlobNormalizationService.normalize_media_type(descriptor)
        logger.debug(
            "blob_migration_moving",
            sha256=descriptor.sha256,
            type=descriptor.type,
            size=descriptor.size,
        )

        try:
            self.destination_store.keep(descriptor, self.owner)
        except Exception as e:  # noqa: BLE001
            # Source copy stays in place; the next run retries it.
            run.write_failures += 1
            logger.error(  # noqa: TRY400
                "blob_migration_write_failed",
                sha256=descriptor.sha256,
                type=descriptor.type,
                size=descriptor.size,
                error=str(e),
            )
            return

        try:
            self.source_store.delete(descriptor.sha256, self.owner)
        except Exception as e:  # noqa: BLE001
            run.delete_failures += 1
            logger.error(  # noqa: TRY400
                "blob_migration_delete_failed",
                sha256=descriptor.sha256,
                type=descriptor.type,
                size=descriptor.size,
                error=str(e),
                inconsistency="duplicate_left_in_source",
            )

        run.migrated[descriptor.sha256] = descriptor
