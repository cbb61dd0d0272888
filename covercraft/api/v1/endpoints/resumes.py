from typing import Optional
import base64
import binascii
import logging
import time

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from covercraft.core.config import settings
from covercraft.core.errors import StorageError, ValidationError
from covercraft.core.security import Authenticated, CallerIdentity, get_current_user, get_optional_caller
from covercraft.crud import crud_resume
from covercraft.db.session import get_db
from covercraft.schemas.ResumeSchemas import (
    ResumeDetail,
    ResumeFileIn,
    ResumeListResponse,
    ResumeOut,
    ResumeUpdate,
    ResumeUploadRequest,
)
from covercraft.services.resume_ingestion import ExtractionResult, extract_resume_text, file_extension
from covercraft.tools.file_uploader import ResumeStore, get_resume_store

logger = logging.getLogger(__name__)

router = APIRouter()


def _decode_content(content: str) -> bytes:
    try:
        data = base64.b64decode(content, validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError("File content must be base64 encoded")
    if len(data) > settings.MAX_RESUME_BYTES:
        raise ValidationError("File size must be less than 5 MB")
    return data


def _discard_upload(store: ResumeStore, storage_path: str) -> None:
    try:
        store.delete(storage_path)
    except StorageError as e:
        logger.error("Could not remove orphaned upload %s: %s", storage_path, e)


def _upload_authenticated(file: ResumeFileIn, user: Authenticated, store: ResumeStore, db: Session) -> ResumeOut:
    extension = file_extension(file.filename)

    if file.content:
        data = _decode_content(file.content)
        storage_path = store.upload(data, store.build_path(user.user_id, extension))
        extraction = extract_resume_text(data, extension)
    elif file.storage_path:
        storage_path = file.storage_path
        if not store.is_owned_by(storage_path, user.user_id):
            logger.warning("Rejected storage path outside the caller's folder: %s", storage_path)
            raise ValidationError("Invalid storage path")
        try:
            data = store.download(storage_path)
        except StorageError as e:
            # Parsing is best effort; the record is still created without text
            logger.warning("Could not fetch %s for parsing: %s", storage_path, e)
            extraction = ExtractionResult(text="", ok=False, error=e.message)
        else:
            extraction = extract_resume_text(data, extension)
    else:
        raise ValidationError("Either storage_path or content is required")

    try:
        resume = crud_resume.create_resume(
            db,
            owner_id=user.user_id,
            storage_path=storage_path,
            resume_text=extraction.text,
            filename=file.filename,
            original_filename=file.original_filename,
            file_size=file.file_size,
            file_type=file.file_type,
            is_default=file.is_default,
        )
    except Exception:
        # Only a binary uploaded by this request is ours to remove
        if file.content:
            _discard_upload(store, storage_path)
        raise
    result = ResumeOut.model_validate(resume)
    result.extraction_error = extraction.error
    return result


def _parse_anonymous(file: ResumeFileIn) -> ResumeOut:
    if not file.content:
        raise ValidationError("File content is required for anonymous parsing")

    data = _decode_content(file.content)
    extraction = extract_resume_text(data, file_extension(file.filename))
    return ResumeOut(
        id=f"anonymous-{int(time.time() * 1000)}",
        filename=file.filename,
        original_filename=file.original_filename,
        file_size=file.file_size,
        file_type=file.file_type,
        resume_text=extraction.text,
        is_default=False,
        extraction_error=extraction.error,
    )


@router.post("", response_model=ResumeOut, status_code=status.HTTP_201_CREATED)
def upload_resume(
    body: ResumeUploadRequest,
    caller: CallerIdentity = Depends(get_optional_caller),
    db: Session = Depends(get_db),
    store: ResumeStore = Depends(get_resume_store),
):
    """
    Upload a resume and extract its text.

    Signed-in callers get a stored record (the binary is either already in
    object storage at `storage_path` or sent inline as base64 `content`).
    Anonymous callers get the parsed text back without anything being stored.
    """
    if isinstance(caller, Authenticated):
        return _upload_authenticated(body.file, caller, store, db)
    return _parse_anonymous(body.file)


@router.get("")
def read_resumes(
    id: Optional[str] = Query(None),
    limit: int = Query(settings.DEFAULT_PAGE_LIMIT),
    offset: int = Query(0),
    user: Authenticated = Depends(get_current_user),
    db: Session = Depends(get_db),
    store: ResumeStore = Depends(get_resume_store),
):
    """One resume with a signed download URL when `id` is given, otherwise a page of resumes."""
    if id:
        resume = crud_resume.get_resume(db, user.user_id, id)
        detail = ResumeDetail.model_validate(resume)
        detail.download_url = store.signed_url(resume.storage_path)
        return detail

    resumes, count = crud_resume.get_resumes(db, user.user_id, skip=max(offset, 0), limit=max(limit, 1))
    return ResumeListResponse(data=[ResumeOut.model_validate(r) for r in resumes], count=count)


@router.patch("", response_model=ResumeOut)
def update_resume(
    body: ResumeUpdate,
    id: Optional[str] = Query(None),
    user: Authenticated = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    if not id:
        raise ValidationError("Resume ID is required")
    if body.is_default is None and body.resume_text is None:
        raise ValidationError("No update fields provided")

    resume = crud_resume.update_resume(db, user.user_id, id, is_default=body.is_default, resume_text=body.resume_text)
    return ResumeOut.model_validate(resume)


@router.delete("")
def delete_resume(
    id: Optional[str] = Query(None),
    user: Authenticated = Depends(get_current_user),
    db: Session = Depends(get_db),
    store: ResumeStore = Depends(get_resume_store),
):
    if not id:
        raise ValidationError("Resume ID is required")

    resume = crud_resume.get_resume(db, user.user_id, id)
    try:
        store.delete(resume.storage_path)
    except StorageError as e:
        logger.error("Storage delete error for resume %s: %s", id, e)

    crud_resume.delete_resume(db, resume)
    return {"success": True}
