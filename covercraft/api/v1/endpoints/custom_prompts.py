from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from covercraft.core.errors import NotFoundError, ValidationError
from covercraft.core.security import Authenticated, CallerIdentity, get_current_user, get_optional_caller
from covercraft.crud import crud_prompt
from covercraft.db.session import get_db
from covercraft.schemas.PromptSchemas import PromptCreate, PromptListResponse, PromptOut, PromptUpdate

router = APIRouter()


@router.get("")
def read_prompts(
    id: Optional[str] = Query(None),
    default: Optional[str] = Query(None),
    caller: CallerIdentity = Depends(get_optional_caller),
    db: Session = Depends(get_db),
):
    """
    Read prompt templates.

    - `?default=true` returns the global default prompt
    - `?id=` returns one prompt the caller can see (their own or a global one)
    - otherwise lists every prompt the caller can see, newest first
    """
    if default == "true":
        prompt = crud_prompt.get_global_default(db)
        if prompt is None:
            raise NotFoundError("Default prompt not found")
        return PromptOut.model_validate(prompt)

    owner_id = caller.user_id if isinstance(caller, Authenticated) else None

    if id:
        return PromptOut.model_validate(crud_prompt.get_visible_prompt(db, id, owner_id))

    prompts = crud_prompt.list_prompts(db, owner_id)
    return PromptListResponse(data=[PromptOut.model_validate(p) for p in prompts])


@router.post("", response_model=PromptOut, status_code=status.HTTP_201_CREATED)
def create_prompt_endpoint(
    body: PromptCreate,
    user: Authenticated = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    if not body.name or not body.prompt_text:
        raise ValidationError("Name and prompt text are required")

    prompt = crud_prompt.create_prompt(db, user.user_id, body.name, body.prompt_text, is_default=body.is_default)
    return PromptOut.model_validate(prompt)


@router.patch("", response_model=PromptOut)
def update_prompt_endpoint(
    body: PromptUpdate,
    id: Optional[str] = Query(None),
    user: Authenticated = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    if not id:
        raise ValidationError("Prompt ID is required")

    prompt = crud_prompt.update_prompt(db, user.user_id, id, body.model_dump(exclude_none=True))
    return PromptOut.model_validate(prompt)


@router.delete("")
def delete_prompt_endpoint(
    id: Optional[str] = Query(None),
    user: Authenticated = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    if not id:
        raise ValidationError("Prompt ID is required")

    crud_prompt.delete_prompt(db, user.user_id, id)
    return {"success": True}
