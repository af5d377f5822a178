from __future__ import annotations

from pymongo import MongoClient

from application.ports.blob_store import BlobStore
from infrastructure.blob_stores.fsspec_blob_store import FsspecBlobStore
from infrastructure.blob_stores.mongo_blob_store import MongoBlobStore

MONGO_SCHEMES = ("mongodb://", "mongodb+srv://")


def create_blob_store(
    url: str,
    *,
    mongo_db: str,
    collection: str,
    storage_options: dict | None = None,
    service_url: str | None = None,
) -> BlobStore:
    """Build a blob store for ``url``.

    ``mongodb://`` and ``mongodb+srv://`` URLs get a Mongo-backed index in
    ``mongo_db.collection``; anything else is handed to fsspec.
    """
    if url.startswith(MONGO_SCHEMES):
        return MongoBlobStore(
            MongoClient(url, tz_aware=True),
            mongo_db,
            collection,
            service_url=service_url,
        )
    return FsspecBlobStore(url, storage_options=storage_options, service_url=service_url)
