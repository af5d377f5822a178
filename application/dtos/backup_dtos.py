from pydantic import BaseModel, Field


class BackupResponse(BaseModel):
    archive_name: str = Field(..., description="File name of the uploaded archive")
    target_url: str = Field(..., description="Where the archive was uploaded")
    size_bytes: int = Field(..., description="Size of the uploaded archive in bytes")
