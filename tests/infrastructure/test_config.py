"""Tests for settings resolution and container wiring."""

from __future__ import annotations

import hashlib

import pytest
from bech32 import bech32_encode, convertbits

from application.use_cases.backup_use_cases import RunBackupUseCase
from application.use_cases.migration_use_cases import MigrateBlobsUseCase
from domain.exceptions import ValidationError
from domain.value_objects.blob_descriptor import BlobDescriptor
from infrastructure.blob_stores.fsspec_blob_store import FsspecBlobStore
from infrastructure.config import Settings
from infrastructure.di.container import create_container


def _settings(**env) -> Settings:
    return Settings(_env_file=None, **env)


class TestSettings:
    def test_hex_owner(self, owner_pubkey) -> None:
        assert _settings(OWNER_PUBKEY=owner_pubkey.upper()).owner_pubkey() == owner_pubkey

    def test_npub_owner(self, owner_pubkey) -> None:
        npub = bech32_encode("npub", convertbits(bytes.fromhex(owner_pubkey), 8, 5))

        assert _settings(OWNER_NPUB=npub).owner_pubkey() == owner_pubkey

    def test_hex_wins_over_npub(self, owner_pubkey, other_owner_pubkey) -> None:
        npub = bech32_encode("npub", convertbits(bytes.fromhex(other_owner_pubkey), 8, 5))

        settings = _settings(OWNER_PUBKEY=owner_pubkey, OWNER_NPUB=npub)

        assert settings.owner_pubkey() == owner_pubkey

    def test_missing_owner(self) -> None:
        with pytest.raises(ValidationError, match="OWNER_PUBKEY"):
            _settings().owner_pubkey()

    def test_malformed_owner(self) -> None:
        with pytest.raises(ValidationError):
            _settings(OWNER_PUBKEY="not-a-key").owner_pubkey()

    @pytest.mark.parametrize(
        ("provider", "enabled"),
        [("none", False), ("", False), ("aws", True), ("gcp", True), ("s3", True)],
    )
    def test_backup_enabled(self, provider, enabled) -> None:
        assert _settings(BACKUP_PROVIDER=provider).backup_enabled is enabled


class TestContainer:
    def test_resolves_migration_use_case(self, owner_pubkey, memory_url) -> None:
        container = create_container(
            _settings(
                OWNER_PUBKEY=owner_pubkey,
                SOURCE_STORE_URL=f"{memory_url}/outbox",
                DESTINATION_STORE_URL=f"{memory_url}/blossom",
            ),
        )

        use_case = container[MigrateBlobsUseCase]

        assert use_case.owner == owner_pubkey
        assert isinstance(use_case.source_store, FsspecBlobStore)
        assert use_case.source_store.base_url == f"{memory_url}/outbox"
        assert use_case.destination_store.base_url == f"{memory_url}/blossom"

    def test_stores_are_reused(self, owner_pubkey, memory_url) -> None:
        container = create_container(
            _settings(
                OWNER_PUBKEY=owner_pubkey,
                SOURCE_STORE_URL=f"{memory_url}/outbox",
                DESTINATION_STORE_URL=f"{memory_url}/blossom",
            ),
        )

        first = container[MigrateBlobsUseCase]
        second = container[MigrateBlobsUseCase]

        assert first.source_store is second.source_store

    def test_resolves_backup_use_case(self, tmp_path) -> None:
        container = create_container(
            _settings(
                BACKUP_PROVIDER="aws",
                AWS_BUCKET="relay-backups",
                BACKUP_SOURCE_DIR=str(tmp_path / "db"),
            ),
        )

        use_case = container[RunBackupUseCase]

        assert use_case.source_dir == tmp_path / "db"
        assert use_case.archive_path == tmp_path / "db.zip"


def test_end_to_end_migration_through_container(owner_pubkey, memory_url) -> None:
    container = create_container(
        _settings(
            OWNER_PUBKEY=owner_pubkey,
            SOURCE_STORE_URL=f"{memory_url}/outbox",
            DESTINATION_STORE_URL=f"{memory_url}/blossom",
        ),
    )
    use_case = container[MigrateBlobsUseCase]
    payload = hashlib.sha256(b"x").hexdigest()

    use_case.source_store.keep(BlobDescriptor(sha256=payload, size=1), owner_pubkey)

    report = use_case.execute().unwrap()

    assert report.migrated_digests == [payload]
