"""Tests for the worker entry points."""

from __future__ import annotations

import pytest

from application.use_cases.backup_use_cases import RunBackupUseCase
from application.use_cases.migration_use_cases import MigrateBlobsUseCase
from domain.exceptions import ValidationError
from infrastructure.worker import make_backup_job, run_startup_migration
from tests.mocks import MockArchiver, MockBlobStore, MockUploader


class _Container:
    def __init__(self, value: object) -> None:
        self.value = value

    def __getitem__(self, key: type) -> object:
        if isinstance(self.value, Exception):
            raise self.value
        return self.value


@pytest.mark.asyncio
async def test_startup_migration_runs_use_case(owner_pubkey, three_descriptors) -> None:
    source = MockBlobStore(three_descriptors, owner=owner_pubkey)
    destination = MockBlobStore()

    await run_startup_migration(_Container(MigrateBlobsUseCase(source, destination, owner_pubkey)))

    assert source.digests(owner_pubkey) == set()
    assert len(destination.digests(owner_pubkey)) == 3


@pytest.mark.asyncio
async def test_startup_migration_tolerates_enumeration_failure(owner_pubkey) -> None:
    source = MockBlobStore(owner=owner_pubkey, fail_enumerate=True)

    await run_startup_migration(_Container(MigrateBlobsUseCase(source, MockBlobStore(), owner_pubkey)))


@pytest.mark.asyncio
async def test_startup_migration_skips_when_misconfigured() -> None:
    await run_startup_migration(_Container(ValidationError("No owner configured")))


def test_backup_job_runs_use_case(tmp_path) -> None:
    uploader = MockUploader()
    use_case = RunBackupUseCase(MockArchiver(b"zip"), uploader, tmp_path / "db", tmp_path / "db.zip")

    make_backup_job(use_case)()

    assert uploader.uploaded == [b"zip"]


def test_backup_job_handles_failed_result(tmp_path) -> None:
    use_case = RunBackupUseCase(MockArchiver(), MockUploader(fail=True), tmp_path / "db", tmp_path / "db.zip")

    make_backup_job(use_case)()

    assert not (tmp_path / "db.zip").exists()
