from pydantic import BaseModel, ConfigDict
from typing import List, Optional
from datetime import datetime


class PromptCreate(BaseModel):
    """Body for POST /custom-prompts. Presence of name/prompt_text is checked by the endpoint."""
    name: Optional[str] = None
    prompt_text: Optional[str] = None
    is_default: bool = False


class PromptUpdate(BaseModel):
    name: Optional[str] = None
    prompt_text: Optional[str] = None
    is_default: Optional[bool] = None


class PromptOut(BaseModel):
    id: str
    user_id: Optional[str] = None
    name: str
    prompt_text: str
    is_default: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class PromptListResponse(BaseModel):
    data: List[PromptOut]
