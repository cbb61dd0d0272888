from typing import List, Optional, Tuple
import logging

from sqlalchemy.orm import Session

from covercraft.core.errors import NotFoundError
from covercraft.crud.defaults import make_sole_default
from covercraft.models.resume import Resume

logger = logging.getLogger(__name__)


def get_resumes(db: Session, owner_id: str, skip: int = 0, limit: int = 10) -> Tuple[List[Resume], int]:
    """Page of the owner's resumes, default first, plus the owner's total count."""
    query = db.query(Resume).filter(Resume.user_id == owner_id)
    total = query.count()
    resumes = (
        query.order_by(Resume.is_default.desc(), Resume.created_at.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )
    return resumes, total


def get_resume(db: Session, owner_id: str, resume_id: str) -> Resume:
    resume = db.query(Resume).filter(Resume.id == resume_id, Resume.user_id == owner_id).first()
    if resume is None:
        raise NotFoundError("Resume not found")
    return resume


def create_resume(
    db: Session,
    *,
    owner_id: str,
    storage_path: str,
    resume_text: str,
    filename: Optional[str] = None,
    original_filename: Optional[str] = None,
    file_size: Optional[int] = None,
    file_type: Optional[str] = None,
    is_default: bool = False,
) -> Resume:
    """
    Create a new resume record in the database.
    """
    db_resume = Resume(
        user_id=owner_id,
        filename=filename,
        original_filename=original_filename,
        file_size=file_size,
        file_type=file_type,
        storage_path=storage_path,
        resume_text=resume_text or "",
        is_default=bool(is_default),
    )
    try:
        db.add(db_resume)
        if is_default:
            make_sole_default(db, Resume, owner_id, db_resume)
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("Error saving resume for owner %s", owner_id)
        raise
    db.refresh(db_resume)
    return db_resume


def update_resume(
    db: Session,
    owner_id: str,
    resume_id: str,
    *,
    is_default: Optional[bool] = None,
    resume_text: Optional[str] = None,
) -> Resume:
    resume = get_resume(db, owner_id, resume_id)
    try:
        if resume_text is not None:
            resume.resume_text = resume_text
        if is_default is True:
            make_sole_default(db, Resume, owner_id, resume)
        elif is_default is False:
            resume.is_default = False
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("Error updating resume %s", resume_id)
        raise
    db.refresh(resume)
    return resume


def delete_resume(db: Session, resume: Resume) -> None:
    db.delete(resume)
    db.commit()
