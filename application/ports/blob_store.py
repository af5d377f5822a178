from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Iterator

    from domain.value_objects.blob_descriptor import BlobDescriptor


class BlobStore(Protocol):
    """Port for a store that indexes blob descriptors per owner."""

    def enumerate(self, owner: str) -> Iterator[BlobDescriptor]:
        """Lazily yield every descriptor currently owned by ``owner``.

        The full result set is never materialized up front. Each call starts a
        fresh enumeration.

        Raises:
            EnumerationError: If the owner's index cannot be read.

        """
        ...

    def keep(self, descriptor: BlobDescriptor, owner: str) -> None:
        """Idempotently persist ``descriptor`` under ``owner``.

        Raises:
            StoreWriteError: On any I/O or validation failure.

        """
        ...

    def delete(self, sha256: str, owner: str) -> None:
        """Idempotently remove the descriptor for ``sha256``; absent entries are fine.

        Raises:
            StoreDeleteError: On I/O failure.

        """
        ...
