from pydantic import BaseModel, ConfigDict
from typing import List, Optional
from datetime import datetime


class ResumeFileIn(BaseModel):
    """File descriptor sent with POST /resumes.

    Authenticated callers either reference a binary already in object storage
    (storage_path) or send it inline as base64 (content). Anonymous callers
    must send content; nothing is stored for them.
    """
    filename: str
    original_filename: Optional[str] = None
    file_size: Optional[int] = None
    file_type: Optional[str] = None
    storage_path: Optional[str] = None
    content: Optional[str] = None
    is_default: bool = False


class ResumeUploadRequest(BaseModel):
    file: ResumeFileIn


class ResumeUpdate(BaseModel):
    is_default: Optional[bool] = None
    resume_text: Optional[str] = None


class ResumeOut(BaseModel):
    id: str
    user_id: Optional[str] = None
    filename: Optional[str] = None
    original_filename: Optional[str] = None
    file_size: Optional[int] = None
    file_type: Optional[str] = None
    storage_path: Optional[str] = None
    resume_text: str = ""
    is_default: bool = False
    created_at: Optional[datetime] = None
    # Set when the text could not be extracted; the upload still succeeds
    extraction_error: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class ResumeDetail(ResumeOut):
    download_url: Optional[str] = None


class ResumeListResponse(BaseModel):
    data: List[ResumeOut]
    count: int
