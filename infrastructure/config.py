from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from domain.exceptions import ValidationError
from domain.value_objects.owner_pubkey import parse_owner_pubkey

PROJECT_ROOT = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # make it absolute so reload/CWD doesn't break it
        env_file=PROJECT_ROOT / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="BlobMover", validation_alias="APP_NAME")
    app_env: Literal["development", "staging", "production"] = Field(
        default="development",
        validation_alias="APP_ENV",
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_dir: Path = Field(
        default=PROJECT_ROOT / "logs",
        validation_alias="LOG_DIR",
    )

    # API
    api_host: str = Field(default="127.0.0.1", validation_alias="API_HOST")
    api_port: int = Field(default=8000, validation_alias="API_PORT")

    # Owner identity
    owner_pubkey_hex: str | None = Field(
        default=None,
        validation_alias="OWNER_PUBKEY",
        description="Hex public key of the owner whose blobs are migrated. Wins over OWNER_NPUB.",
    )
    owner_npub: str | None = Field(
        default=None,
        validation_alias="OWNER_NPUB",
        description="bech32 npub of the owner, decoded to hex at startup.",
    )
    service_url: str | None = Field(
        default=None,
        validation_alias="SERVICE_URL",
        description="Public base URL blobs are served from. Used to fill missing descriptor URLs.",
    )

    # Blob stores
    source_store_url: str = Field(
        default="file://" + str(PROJECT_ROOT / "blobs" / "outbox"),
        validation_alias="SOURCE_STORE_URL",
    )
    destination_store_url: str = Field(
        default="file://" + str(PROJECT_ROOT / "blobs" / "blossom"),
        validation_alias="DESTINATION_STORE_URL",
    )
    store_storage_options: dict = {}

    # MongoDB (only used when a store URL is a mongodb:// URL)
    mongo_db: str = Field(default="blobmover", validation_alias="MONGO_DB")
    source_collection: str = Field(default="outbox_blobs", validation_alias="SOURCE_COLLECTION")
    destination_collection: str = Field(
        default="blossom_blobs",
        validation_alias="DESTINATION_COLLECTION",
    )

    # Migration
    migrate_on_startup: bool = Field(default=True, validation_alias="MIGRATE_ON_STARTUP")

    # Backups
    backup_provider: Literal["none", "", "aws", "gcp", "s3"] = Field(
        default="none",
        validation_alias="BACKUP_PROVIDER",
    )
    backup_interval_hours: int = Field(default=24, ge=1, validation_alias="BACKUP_INTERVAL_HOURS")
    backup_source_dir: Path = Field(
        default=PROJECT_ROOT / "db",
        validation_alias="BACKUP_SOURCE_DIR",
    )
    backup_archive_name: str = Field(default="db.zip", validation_alias="BACKUP_ARCHIVE_NAME")

    # AWS (default credential chain)
    aws_bucket: str | None = Field(default=None, validation_alias="AWS_BUCKET")

    # GCP (application default credentials)
    gcp_bucket: str | None = Field(default=None, validation_alias="GCP_BUCKET")

    # S3-compatible (static credentials, e.g. DigitalOcean Spaces or MinIO)
    s3_access_key_id: str | None = Field(default=None, validation_alias="S3_ACCESS_KEY_ID")
    s3_secret_key: str | None = Field(default=None, validation_alias="S3_SECRET_KEY")
    s3_endpoint: str | None = Field(default=None, validation_alias="S3_ENDPOINT")
    s3_region: str | None = Field(default=None, validation_alias="S3_REGION")
    s3_bucket_name: str | None = Field(default=None, validation_alias="S3_BUCKET_NAME")

    @property
    def backup_enabled(self) -> bool:
        return self.backup_provider not in ("none", "")

    def owner_pubkey(self) -> str:
        """Resolve the configured owner to a hex public key.

        Raises:
            ValidationError: If no owner is configured or the value is malformed.

        """
        if self.owner_pubkey_hex:
            return parse_owner_pubkey(self.owner_pubkey_hex)
        if self.owner_npub:
            return parse_owner_pubkey(self.owner_npub)
        msg = "No owner configured: set OWNER_PUBKEY or OWNER_NPUB"
        raise ValidationError(msg)


# Global settings instance
settings = Settings()
