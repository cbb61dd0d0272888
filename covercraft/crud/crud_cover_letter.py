from typing import Any, Dict, List, Tuple
import logging

from sqlalchemy.orm import Session

from covercraft.core.errors import NotFoundError
from covercraft.models.cover_letter import CoverLetter

logger = logging.getLogger(__name__)

MAX_PAGE_LIMIT = 100


def list_cover_letters(db: Session, owner_id: str, *, limit: int = 10, offset: int = 0) -> Tuple[List[CoverLetter], int]:
    """Page of the owner's cover letters, newest first, with the owner's total."""
    if limit < 1:
        limit = 10
    if limit > MAX_PAGE_LIMIT:
        limit = MAX_PAGE_LIMIT
    if offset < 0:
        offset = 0

    query = db.query(CoverLetter).filter(CoverLetter.user_id == owner_id)
    total = query.count()
    items = query.order_by(CoverLetter.created_at.desc()).offset(offset).limit(limit).all()

    logger.info("Listed cover letters: owner=%s, limit=%s, offset=%s, total=%s", owner_id, limit, offset, total)
    return items, total


def get_cover_letter(db: Session, owner_id: str, cover_letter_id: str) -> CoverLetter:
    cover_letter = (
        db.query(CoverLetter)
        .filter(CoverLetter.id == cover_letter_id, CoverLetter.user_id == owner_id)
        .first()
    )
    if cover_letter is None:
        raise NotFoundError("Cover letter not found")
    return cover_letter


def create_cover_letter(db: Session, owner_id: str, data: Dict[str, Any]) -> CoverLetter:
    cover_letter = CoverLetter(
        user_id=owner_id,
        template_name=data["template_name"],
        template_description=data["template_description"],
        cover_letter_content=data["cover_letter_content"],
        resume_text=data.get("resume_text") or None,
    )
    try:
        db.add(cover_letter)
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("Error saving cover letter for owner %s", owner_id)
        raise
    db.refresh(cover_letter)
    logger.info("Cover letter saved successfully with id: %s", cover_letter.id)
    return cover_letter


def update_cover_letter(db: Session, owner_id: str, cover_letter_id: str, updates: Dict[str, Any]) -> CoverLetter:
    cover_letter = get_cover_letter(db, owner_id, cover_letter_id)
    for field, value in updates.items():
        setattr(cover_letter, field, value)
    try:
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("Error updating cover letter %s", cover_letter_id)
        raise
    db.refresh(cover_letter)
    return cover_letter


def delete_cover_letter(db: Session, owner_id: str, cover_letter_id: str) -> None:
    cover_letter = get_cover_letter(db, owner_id, cover_letter_id)
    db.delete(cover_letter)
    db.commit()
