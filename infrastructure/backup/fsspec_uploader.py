from __future__ import annotations

from typing import TYPE_CHECKING

import fsspec
import structlog

from application.ports.backup_uploader import BackupUploader
from domain.exceptions import InfrastructureError, ValidationError

if TYPE_CHECKING:
    from pathlib import Path

    from infrastructure.config import Settings

logger = structlog.get_logger()

CHUNK_SIZE = 1024 * 1024
SUPPORTED_PROVIDERS = ("aws", "gcp", "s3")


class FsspecBackupUploader(BackupUploader):
    """Upload a local file to any fsspec URL (``s3://``, ``gcs://``, ``memory://`` ...)."""

    def __init__(self, target_url: str, *, storage_options: dict | None = None) -> None:
        self.target_url = target_url
        self.storage_options = storage_options or {}

    def upload(self, local_path: Path) -> str:
        size = 0
        try:
            with (
                local_path.open("rb") as src,
                fsspec.open(self.target_url, "wb", **self.storage_options) as out,
            ):
                while True:
                    chunk = src.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    out.write(chunk)
                    size += len(chunk)
        except OSError as e:
            msg = f"Failed to upload {local_path.name} to {self.target_url}: {e!s}"
            raise InfrastructureError(msg) from e

        logger.info("backup_upload_finished", target_url=self.target_url, size_bytes=size)
        return self.target_url


def create_backup_uploader(settings: Settings) -> FsspecBackupUploader:
    """Build the uploader selected by ``BACKUP_PROVIDER``.

    Raises:
        ValidationError: If the provider is unsupported or its settings are missing.

    """
    provider = settings.backup_provider
    archive = settings.backup_archive_name

    if provider == "aws":
        if not settings.aws_bucket:
            msg = "AWS specified as backup provider but AWS_BUCKET is not set"
            raise ValidationError(msg)
        # Credentials come from the default AWS chain (env, profile, instance role)
        return FsspecBackupUploader(f"s3://{settings.aws_bucket}/{archive}")

    if provider == "gcp":
        if not settings.gcp_bucket:
            msg = "GCP specified as backup provider but GCP_BUCKET is not set"
            raise ValidationError(msg)
        return FsspecBackupUploader(f"gcs://{settings.gcp_bucket}/{archive}")

    if provider == "s3":
        required = {
            "S3_ACCESS_KEY_ID": settings.s3_access_key_id,
            "S3_SECRET_KEY": settings.s3_secret_key,
            "S3_ENDPOINT": settings.s3_endpoint,
            "S3_BUCKET_NAME": settings.s3_bucket_name,
        }
        missing = [name for name, value in required.items() if not value]
        if missing:
            msg = f"S3 specified as backup provider but {', '.join(missing)} not set"
            raise ValidationError(msg)

        client_kwargs: dict[str, str] = {"endpoint_url": f"https://{settings.s3_endpoint}"}
        if settings.s3_region:
            client_kwargs["region_name"] = settings.s3_region
        return FsspecBackupUploader(
            f"s3://{settings.s3_bucket_name}/{archive}",
            storage_options={
                "key": settings.s3_access_key_id,
                "secret": settings.s3_secret_key,
                "client_kwargs": client_kwargs,
            },
        )

    msg = f"Unsupported backup provider {provider!r}: only {', '.join(SUPPORTED_PROVIDERS)} are supported"
    raise ValidationError(msg)
