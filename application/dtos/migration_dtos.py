from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field


class MigrationStatus(StrEnum):
    COMPLETED = "completed"
    NOTHING_TO_MIGRATE = "nothing_to_migrate"


class MigrationReport(BaseModel):
    owner: str = Field(..., description="Hex public key whose blobs were migrated")
    run_id: str = Field(..., description="Identifier bound to every log event of the run")
    status: MigrationStatus = Field(..., description="How the run ended")
    discovered: int = Field(0, description="Descriptors produced by the source enumeration")
    migrated: int = Field(0, description="Descriptors written to the destination")
    write_failures: int = Field(0, description="Descriptors the destination rejected")
    delete_failures: int = Field(
        0,
        description="Migrated descriptors left behind in the source (tolerated duplicates)",
    )
    migrated_digests: list[str] = Field(
        default_factory=list,
        description="Digests written to the destination, in processing order",
    )
    duration_seconds: float = Field(0.0, description="Wall-clock duration of the run")
