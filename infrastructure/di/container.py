from __future__ import annotations

from functools import cache
from typing import TYPE_CHECKING

from lagom import Container

from application.use_cases.backup_use_cases import RunBackupUseCase
from application.use_cases.migration_use_cases import MigrateBlobsUseCase
from infrastructure.backup.fsspec_uploader import create_backup_uploader
from infrastructure.backup.zip_archiver import ZipDirectoryArchiver
from infrastructure.blob_stores.factory import create_blob_store
from infrastructure.config import Settings, settings

if TYPE_CHECKING:
    from application.ports.blob_store import BlobStore


def create_container(app_settings: Settings | None = None) -> Container:
    """Wire stores and use cases.

    Stores are built on first use and then reused, so nothing connects to a
    backend or resolves the owner until a use case is actually requested.
    """
    app_settings = app_settings or settings
    container = Container()

    container[Settings] = app_settings

    # Blob stores (source and destination share the BlobStore port)
    @cache
    def source_store() -> BlobStore:
        return create_blob_store(
            app_settings.source_store_url,
            mongo_db=app_settings.mongo_db,
            collection=app_settings.source_collection,
            storage_options=app_settings.store_storage_options,
            service_url=app_settings.service_url,
        )

    @cache
    def destination_store() -> BlobStore:
        return create_blob_store(
            app_settings.destination_store_url,
            mongo_db=app_settings.mongo_db,
            collection=app_settings.destination_collection,
            storage_options=app_settings.store_storage_options,
            service_url=app_settings.service_url,
        )

    # Register Use Cases
    container[MigrateBlobsUseCase] = lambda _: MigrateBlobsUseCase(
        source_store=source_store(),
        destination_store=destination_store(),
        owner=app_settings.owner_pubkey(),
    )

    container[RunBackupUseCase] = lambda _: RunBackupUseCase(
        archiver=ZipDirectoryArchiver(),
        uploader=create_backup_uploader(app_settings),
        source_dir=app_settings.backup_source_dir,
        archive_path=app_settings.backup_source_dir.parent / app_settings.backup_archive_name,
    )

    return container
