from __future__ import annotations

from typing import TYPE_CHECKING

import fsspec
import structlog
from pydantic import ValidationError as PydanticValidationError

from application.ports.blob_store import BlobStore
from domain.exceptions import EnumerationError, StoreDeleteError, StoreWriteError
from domain.services.blob_normalization_service import BlobNormalizationService
from domain.value_objects.blob_descriptor import BlobDescriptor

if TYPE_CHECKING:
    from collections.abc import Iterator

    from fsspec import AbstractFileSystem

logger = structlog.get_logger()

INDEX_SUFFIX = ".json"

# url_to_fs raises ValueError for an unknown protocol and ImportError when the
# protocol's backend package is not installed
FILESYSTEM_ERRORS = (OSError, ValueError, ImportError)


class FsspecBlobStore(BlobStore):
    """Blob descriptor index kept as JSON documents on any fsspec filesystem.

    Layout: ``{base_url}/{owner}/{sha256[:2]}/{sha256}.json``. Enumeration
    lists one shard directory at a time.
    """

    def __init__(
        self,
        base_url: str,
        *,
        storage_options: dict | None = None,
        service_url: str | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.storage_options = storage_options or {}
        self.service_url = service_url

    def _owner_url(self, owner: str) -> str:
        return f"{self.base_url}/{owner}"

    def _url(self, owner: str, sha256: str) -> str:
        return f"{self._owner_url(owner)}/{sha256[:2]}/{sha256}{INDEX_SUFFIX}"

    def _fs(self, url: str) -> tuple[AbstractFileSystem, str]:
        return fsspec.core.url_to_fs(url, **self.storage_options)

    def enumerate(self, owner: str) -> Iterator[BlobDescriptor]:
        try:
            fs, root = self._fs(self._owner_url(owner))
            if not fs.exists(root):
                return

            for dirpath, _dirs, files in fs.walk(root, on_error="raise"):
                for name in sorted(files):
                    if not name.endswith(INDEX_SUFFIX):
                        continue
                    descriptor = self._load(fs, f"{dirpath.rstrip('/')}/{name}", owner)
                    if descriptor is not None:
                        yield descriptor
        except FILESYSTEM_ERRORS as e:
            msg = f"Cannot read blob index at {self._owner_url(owner)}: {e!s}"
            raise EnumerationError(msg, owner=owner) from e

    def _load(self, fs: AbstractFileSystem, path: str, owner: str) -> BlobDescriptor | None:
        try:
            with fs.open(path, "rb") as f:
                raw = f.read()
        except FileNotFoundError:
            logger.debug("blob_index_entry_vanished", path=path, owner=owner)
            return None
        except OSError as e:
            logger.warning("blob_index_entry_invalid", path=path, owner=owner, error=str(e))
            return None

        try:
            descriptor = BlobDescriptor.model_validate_json(raw)
        except PydanticValidationError as e:
            logger.warning("blob_index_entry_invalid", path=path, owner=owner, error=str(e))
            return None

        if descriptor.owner is None:
            descriptor = descriptor.model_copy(update={"owner": owner})
        return BlobNormalizationService.with_service_url(descriptor, self.service_url)

    def keep(self, descriptor: BlobDescriptor, owner: str) -> None:
        try:
            stored = BlobDescriptor.model_validate({**descriptor.model_dump(), "owner": owner})
        except PydanticValidationError as e:
            msg = f"Rejected blob descriptor {descriptor.sha256}: {e!s}"
            raise StoreWriteError(msg, owner=owner, sha256=descriptor.sha256) from e

        url = self._url(owner, stored.sha256)
        try:
            fs, path = self._fs(url)
            fs.makedirs(path.rsplit("/", 1)[0], exist_ok=True)
            with fs.open(path, "wb") as out:
                out.write(stored.model_dump_json(exclude_none=True).encode("utf-8"))
        except FILESYSTEM_ERRORS as e:
            msg = f"Failed to write {url}: {e!s}"
            raise StoreWriteError(msg, owner=owner, sha256=stored.sha256) from e

    def delete(self, sha256: str, owner: str) -> None:
        url = self._url(owner, sha256)
        try:
            fs, path = self._fs(url)
            if fs.exists(path):
                fs.rm(path)
        except FileNotFoundError:
            return
        except FILESYSTEM_ERRORS as e:
            msg = f"Failed to delete {url}: {e!s}"
            raise StoreDeleteError(msg, owner=owner, sha256=sha256) from e
