"""MongoDB-backed blob descriptor index.

One document per ``(owner, sha256)`` pair, enforced by a unique compound
index. Enumeration streams a cursor, so the driver fetches documents in
batches and the full result set is never loaded at once.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from pydantic import ValidationError as PydanticValidationError
from pymongo import ASCENDING
from pymongo.errors import PyMongoError

from application.ports.blob_store import BlobStore
from domain.exceptions import EnumerationError, StoreDeleteError, StoreWriteError
from domain.services.blob_normalization_service import BlobNormalizationService
from domain.value_objects.blob_descriptor import BlobDescriptor

if TYPE_CHECKING:
    from collections.abc import Iterator

    from pymongo import MongoClient
    from pymongo.collection import Collection

logger = structlog.get_logger()


class MongoBlobStore(BlobStore):
    def __init__(
        self,
        client: MongoClient,
        db_name: str,
        collection_name: str,
        *,
        service_url: str | None = None,
    ) -> None:
        self.client = client
        self.collection: Collection = client[db_name][collection_name]
        self.service_url = service_url

        self._ensure_indexes()

    def _ensure_indexes(self) -> None:
        self.collection.create_index(
            [("owner", ASCENDING), ("sha256", ASCENDING)],
            unique=True,
            name="owner_sha256_unique",
        )

    def enumerate(self, owner: str) -> Iterator[BlobDescriptor]:
        try:
            cursor = self.collection.find({"owner": owner}, projection={"_id": False})
            for doc in cursor:
                try:
                    descriptor = BlobDescriptor.model_validate(doc)
                except PydanticValidationError as e:
                    logger.warning(
                        "blob_index_entry_invalid",
                        collection=self.collection.name,
                        owner=owner,
                        sha256=doc.get("sha256"),
                        error=str(e),
                    )
                    continue
                yield BlobNormalizationService.with_service_url(descriptor, self.service_url)
        except PyMongoError as e:
            msg = f"Cannot read blob index in {self.collection.name}: {e!s}"
            raise EnumerationError(msg, owner=owner) from e

    def keep(self, descriptor: BlobDescriptor, owner: str) -> None:
        try:
            stored = BlobDescriptor.model_validate({**descriptor.model_dump(), "owner": owner})
        except PydanticValidationError as e:
            msg = f"Rejected blob descriptor {descriptor.sha256}: {e!s}"
            raise StoreWriteError(msg, owner=owner, sha256=descriptor.sha256) from e

        try:
            self.collection.replace_one(
                {"owner": owner, "sha256": stored.sha256},
                stored.model_dump(exclude_none=True),
                upsert=True,
            )
        except PyMongoError as e:
            msg = f"Failed to store blob {stored.sha256} in {self.collection.name}: {e!s}"
            raise StoreWriteError(msg, owner=owner, sha256=stored.sha256) from e

    def delete(self, sha256: str, owner: str) -> None:
        try:
            self.collection.delete_one({"owner": owner, "sha256": sha256})
        except PyMongoError as e:
            msg = f"Failed to delete blob {sha256} from {self.collection.name}: {e!s}"
            raise StoreDeleteError(msg, owner=owner, sha256=sha256) from e
