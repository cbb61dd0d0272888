"""Single-default maintenance shared by prompt templates and resumes.

Both tables carry (user_id, is_default). Within one owner scope at most one row
may be default; user_id NULL is its own scope. The helpers here only stage
changes on the session so the clear and the set land in the caller's single
commit.
"""

from typing import Any, Optional, Type

from sqlalchemy.orm import Session


def owner_clause(model: Type[Any], owner_id: Optional[str]):
    if owner_id is None:
        return model.user_id.is_(None)
    return model.user_id == owner_id


def clear_defaults(db: Session, model: Type[Any], owner_id: Optional[str], keep_id: Optional[str] = None) -> int:
    """Unset is_default on every row in the scope except keep_id."""
    query = db.query(model).filter(owner_clause(model, owner_id), model.is_default.is_(True))
    if keep_id is not None:
        query = query.filter(model.id != keep_id)
    return query.update({model.is_default: False}, synchronize_session="fetch")


def make_sole_default(db: Session, model: Type[Any], owner_id: Optional[str], record: Any) -> None:
    """Flag record as the only default in its owner scope (uncommitted)."""
    if record.id is None:
        db.add(record)
        db.flush()
    clear_defaults(db, model, owner_id, keep_id=record.id)
    record.is_default = True


def count_defaults(db: Session, model: Type[Any], owner_id: Optional[str]) -> int:
    return db.query(model).filter(owner_clause(model, owner_id), model.is_default.is_(True)).count()
