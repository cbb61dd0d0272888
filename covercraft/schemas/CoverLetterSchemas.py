from pydantic import BaseModel, ConfigDict
from typing import List, Literal, Optional
from datetime import datetime


class CoverLetterCreate(BaseModel):
    template_name: Optional[str] = None
    template_description: Optional[str] = None
    cover_letter_content: Optional[str] = None
    resume_text: Optional[str] = None


class CoverLetterUpdate(BaseModel):
    template_name: Optional[str] = None
    template_description: Optional[str] = None
    cover_letter_content: Optional[str] = None


class CoverLetterOut(BaseModel):
    id: str
    user_id: str
    template_name: str
    template_description: str
    cover_letter_content: str
    resume_text: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class CoverLetterSingleResponse(BaseModel):
    data: CoverLetterOut


class CoverLetterListResponse(BaseModel):
    """Response model for cover letter list endpoint"""
    data: List[CoverLetterOut]
    total: int


class CoverLetterExportRequest(BaseModel):
    content: str
    label: str = ""
    format: Literal["pdf", "docx"] = "pdf"
