"""Tests for the database backup use case."""

from __future__ import annotations

from returns.result import Failure, Success

from application.use_cases.backup_use_cases import RunBackupUseCase
from domain.exceptions import InfrastructureError, ValidationError
from tests.mocks import MockArchiver, MockUploader


class TestRunBackupUseCase:
    """Test RunBackupUseCase."""

    def test_backup_success(self, tmp_path) -> None:
        """Test archiving, uploading and cleaning up the local archive."""
        archiver = MockArchiver(payload=b"zipped")
        uploader = MockUploader(target_url="memory://bucket/db.zip")
        archive_path = tmp_path / "db.zip"
        use_case = RunBackupUseCase(archiver, uploader, tmp_path / "db", archive_path)

        result = use_case.execute()

        assert isinstance(result, Success)
        response = result.unwrap()
        assert response.archive_name == "db.zip"
        assert response.target_url == "memory://bucket/db.zip"
        assert response.size_bytes == len(b"zipped")
        assert uploader.uploaded == [b"zipped"]
        assert not archive_path.exists()

    def test_upload_failure_removes_local_archive(self, tmp_path) -> None:
        archive_path = tmp_path / "db.zip"
        use_case = RunBackupUseCase(MockArchiver(), MockUploader(fail=True), tmp_path / "db", archive_path)

        result = use_case.execute()

        assert isinstance(result, Failure)
        assert result.failure().category == "backup_error"
        assert not archive_path.exists()

    def test_archive_failure(self, tmp_path) -> None:
        archiver = MockArchiver(raise_on_call=InfrastructureError("missing directory"))
        uploader = MockUploader()
        use_case = RunBackupUseCase(archiver, uploader, tmp_path / "db", tmp_path / "db.zip")

        result = use_case.execute()

        assert isinstance(result, Failure)
        assert result.failure().category == "backup_error"
        assert uploader.uploaded == []

    def test_validation_error_maps_to_validation_category(self, tmp_path) -> None:
        archiver = MockArchiver(raise_on_call=ValidationError("bad archive name"))
        use_case = RunBackupUseCase(archiver, MockUploader(), tmp_path / "db", tmp_path / "db.zip")

        result = use_case.execute()

        assert isinstance(result, Failure)
        assert result.failure().category == "validation"
