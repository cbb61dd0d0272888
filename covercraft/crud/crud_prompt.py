from typing import Any, Dict, List, Optional
import logging

from sqlalchemy import or_
from sqlalchemy.orm import Session

from covercraft.core.errors import NotFoundError
from covercraft.crud.defaults import make_sole_default, owner_clause
from covercraft.models.prompt import PromptTemplate

logger = logging.getLogger(__name__)


def get_default_prompts(db: Session, owner_id: Optional[str]) -> List[PromptTemplate]:
    """All rows flagged default in one scope. More than one means the invariant is broken."""
    return (
        db.query(PromptTemplate)
        .filter(owner_clause(PromptTemplate, owner_id), PromptTemplate.is_default.is_(True))
        .all()
    )


def get_global_default(db: Session) -> Optional[PromptTemplate]:
    defaults = get_default_prompts(db, None)
    if len(defaults) != 1:
        return None
    return defaults[0]


def _visible_to(owner_id: Optional[str]):
    if owner_id is None:
        return PromptTemplate.user_id.is_(None)
    return or_(PromptTemplate.user_id == owner_id, PromptTemplate.user_id.is_(None))


def list_prompts(db: Session, owner_id: Optional[str]) -> List[PromptTemplate]:
    """Prompts the caller may read: their own plus the global ones, newest first."""
    return (
        db.query(PromptTemplate)
        .filter(_visible_to(owner_id))
        .order_by(PromptTemplate.created_at.desc())
        .all()
    )


def get_visible_prompt(db: Session, prompt_id: str, owner_id: Optional[str]) -> PromptTemplate:
    prompt = (
        db.query(PromptTemplate)
        .filter(PromptTemplate.id == prompt_id, _visible_to(owner_id))
        .first()
    )
    if prompt is None:
        raise NotFoundError("Prompt not found")
    return prompt


def get_owned_prompt(db: Session, prompt_id: str, owner_id: str) -> PromptTemplate:
    prompt = (
        db.query(PromptTemplate)
        .filter(PromptTemplate.id == prompt_id, PromptTemplate.user_id == owner_id)
        .first()
    )
    if prompt is None:
        raise NotFoundError("Prompt not found")
    return prompt


def create_prompt(db: Session, owner_id: Optional[str], name: str, prompt_text: str, is_default: bool = False) -> PromptTemplate:
    """
    Create a prompt template in the owner's scope.

    When is_default is set, the other defaults of the scope are cleared in the
    same transaction.
    """
    prompt = PromptTemplate(user_id=owner_id, name=name, prompt_text=prompt_text, is_default=bool(is_default))
    try:
        db.add(prompt)
        if is_default:
            make_sole_default(db, PromptTemplate, owner_id, prompt)
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("Error saving prompt template for owner %s", owner_id)
        raise
    db.refresh(prompt)
    logger.info("Prompt template created with id: %s, default: %s", prompt.id, prompt.is_default)
    return prompt


def update_prompt(db: Session, owner_id: str, prompt_id: str, changes: Dict[str, Any]) -> PromptTemplate:
    """Apply name/prompt_text/is_default changes to a prompt the caller owns.

    Global prompts never match the owner filter, so they cannot be edited here.
    """
    prompt = get_owned_prompt(db, prompt_id, owner_id)
    try:
        if changes.get("name") is not None:
            prompt.name = changes["name"]
        if changes.get("prompt_text") is not None:
            prompt.prompt_text = changes["prompt_text"]
        if changes.get("is_default") is True:
            make_sole_default(db, PromptTemplate, owner_id, prompt)
        elif changes.get("is_default") is False:
            prompt.is_default = False
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("Error updating prompt template %s", prompt_id)
        raise
    db.refresh(prompt)
    return prompt


def delete_prompt(db: Session, owner_id: str, prompt_id: str) -> None:
    prompt = get_owned_prompt(db, prompt_id, owner_id)
    db.delete(prompt)
    db.commit()
    logger.info("Prompt template %s deleted", prompt_id)
