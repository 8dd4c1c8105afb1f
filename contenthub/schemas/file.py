# contenthub/schemas/file.py
from pydantic import BaseModel
from typing import Optional
from datetime import datetime

# Response schemas
class ProjectFileResponse(BaseModel):
    id: str
    project_id: int
    name: str
    size: Optional[int]
    type: Optional[str]
    s3_key: Optional[str]
    url: Optional[str]
    upload_date: Optional[datetime]
    version: str
    uploaded_by: Optional[str]
    is_latest: bool
    previous_version_id: Optional[str]

    class Config:
        from_attributes = True

class FileListResponse(BaseModel):
    files: list[ProjectFileResponse]
    total: int

class FileUploadResponse(BaseModel):
    """Outcome of a (possibly partial) multi-file upload"""
    files: list[ProjectFileResponse]
    uploaded: int
    requested: int
    error: Optional[str] = None

class FileDownloadResponse(BaseModel):
    file_id: str
    name: str
    presigned_url: str
    expires_in: int = 3600
