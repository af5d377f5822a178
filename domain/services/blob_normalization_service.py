"""Domain service for repairing blob descriptor metadata before it is stored."""

from __future__ import annotations

from typing import TYPE_CHECKING

from domain.value_objects.mime_type import MimeType

if TYPE_CHECKING:
    from domain.value_objects.blob_descriptor import BlobDescriptor


class BlobNormalizationService:
    """Service that applies the metadata repair rules shared by every store.

    Rules are applied uniformly to every descriptor; none of them touches the
    digest.
    """

    @staticmethod
    def normalize_media_type(descriptor: BlobDescriptor) -> BlobDescriptor:
        """Return the descriptor with an empty media type replaced by the generic binary type.

        Args:
            descriptor: The descriptor read from a store

        Returns:
            The same descriptor when it already declares a type, otherwise a copy
            declaring ``application/octet-stream``

        """
        if descriptor.type:
            return descriptor
        return descriptor.model_copy(update={"type": MimeType.OCTET_STREAM.value})

    @staticmethod
    def with_service_url(descriptor: BlobDescriptor, service_url: str | None) -> BlobDescriptor:
        """Fill in the public URL of a descriptor that has none."""
        if descriptor.url or not service_url:
            return descriptor
        return descriptor.model_copy(
            update={"url": f"{service_url.rstrip('/')}/{descriptor.sha256}"},
        )
