from __future__ import annotations

from pydantic import BaseModel, Field

SHA256_PATTERN = r"^[0-9a-f]{64}$"


class BlobDescriptor(BaseModel):
    """Value object describing one content-addressed blob stored for an owner.

    Only metadata is carried; the payload bytes live in whatever backend
    serves the blob. Two descriptors are equal when their digests are equal.
    """

    sha256: str = Field(..., pattern=SHA256_PATTERN)
    """SHA-256 of the blob content. Used as an opaque identity, never recomputed."""

    type: str = ""
    """Declared media type. May be empty at rest."""

    size: int = Field(..., ge=0)
    """Byte length of the blob."""

    owner: str | None = Field(None, pattern=SHA256_PATTERN)
    """Hex public key of the owning identity."""

    url: str | None = None
    """Public URL the blob is served from, if known."""

    uploaded: int | None = None
    """Unix timestamp of the original upload."""

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BlobDescriptor):
            return NotImplemented
        return self.sha256 == other.sha256

    def __hash__(self) -> int:
        return hash(self.sha256)
