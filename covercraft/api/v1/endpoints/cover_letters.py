"""
Cover Letters API Endpoints

Saved cover letters of the signed-in user, plus document export.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from covercraft.core.config import settings
from covercraft.core.errors import ValidationError
from covercraft.core.security import Authenticated, get_current_user
from covercraft.crud import crud_cover_letter
from covercraft.db.session import get_db
from covercraft.schemas.CoverLetterSchemas import (
    CoverLetterCreate,
    CoverLetterExportRequest,
    CoverLetterListResponse,
    CoverLetterOut,
    CoverLetterSingleResponse,
    CoverLetterUpdate,
)
from covercraft.services.letter_export import content_disposition, export_docx, export_pdf

router = APIRouter()

EXPORT_MEDIA_TYPES = {
    "pdf": "application/pdf",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}


@router.get("", response_model=CoverLetterListResponse)
def list_cover_letters_endpoint(
    limit: int = Query(settings.DEFAULT_PAGE_LIMIT),
    offset: int = Query(0),
    user: Authenticated = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    List the caller's saved cover letters, newest first.

    Query Parameters:
    - **limit**: Page size (default: 10, max: 100)
    - **offset**: Number of letters to skip
    """
    items, total = crud_cover_letter.list_cover_letters(db, user.user_id, limit=limit, offset=offset)
    return CoverLetterListResponse(
        data=[CoverLetterOut.model_validate(item) for item in items],
        total=total,
    )


@router.post("", response_model=CoverLetterSingleResponse, status_code=status.HTTP_201_CREATED)
def create_cover_letter_endpoint(
    body: CoverLetterCreate,
    user: Authenticated = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    if not body.template_name or not body.template_description or not body.cover_letter_content:
        raise ValidationError("Missing required fields")

    cover_letter = crud_cover_letter.create_cover_letter(db, user.user_id, body.model_dump())
    return CoverLetterSingleResponse(data=CoverLetterOut.model_validate(cover_letter))


@router.patch("", response_model=CoverLetterSingleResponse)
def update_cover_letter_endpoint(
    body: CoverLetterUpdate,
    id: Optional[str] = Query(None),
    user: Authenticated = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    if not id:
        raise ValidationError("Missing cover letter ID")

    updates = body.model_dump(exclude_none=True)
    if not updates:
        raise ValidationError("No fields to update")

    cover_letter = crud_cover_letter.update_cover_letter(db, user.user_id, id, updates)
    return CoverLetterSingleResponse(data=CoverLetterOut.model_validate(cover_letter))


@router.delete("")
def delete_cover_letter_endpoint(
    id: Optional[str] = Query(None),
    user: Authenticated = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    if not id:
        raise ValidationError("Missing cover letter ID")

    crud_cover_letter.delete_cover_letter(db, user.user_id, id)
    return {"success": True}


@router.post("/export")
def export_cover_letter_endpoint(body: CoverLetterExportRequest):
    """
    Render letter text as a PDF or DOCX download.

    The filename is derived from the sanitized label, e.g. "Jane Doe Cover Letter.pdf".
    """
    if not body.content.strip():
        raise ValidationError("Cover letter content is required")

    if body.format == "docx":
        payload = export_docx(body.content)
    else:
        payload = export_pdf(body.content)

    return Response(
        content=payload,
        media_type=EXPORT_MEDIA_TYPES[body.format],
        headers={"Content-Disposition": content_disposition(body.label, body.format)},
    )
