"""
Prompt Resolver

Chooses which template body drives a generation request.
"""

from typing import Optional
import logging

from sqlalchemy.orm import Session

from covercraft.core.errors import NoDefaultPromptError
from covercraft.core.security import Authenticated, CallerIdentity
from covercraft.crud import crud_prompt

logger = logging.getLogger(__name__)

USER_NO_DEFAULT_MESSAGE = "No default prompt set for this user. Please set one in settings."
ANONYMOUS_NO_DEFAULT_MESSAGE = "No default system prompt found. Please sign in to create your own."


def _single_default(db: Session, owner_id: Optional[str], message: str) -> Optional[str]:
    """Body of the one default in a scope, None if the scope has none.

    A scope with several defaults is treated as unresolvable.
    """
    defaults = crud_prompt.get_default_prompts(db, owner_id)
    if not defaults:
        return None
    if len(defaults) > 1:
        logger.error("Found %d default prompts in scope %s; refusing to pick one", len(defaults), owner_id or "global")
        raise NoDefaultPromptError(message)
    return defaults[0].prompt_text


def resolve_prompt(db: Session, caller: CallerIdentity, override: Optional[str] = None) -> str:
    """
    Return the template body for a generation request.

    Order of precedence:
    1. An explicit override, used verbatim
    2. The authenticated caller's own default
    3. The global default

    Anonymous callers only ever get the global default.

    Raises:
        NoDefaultPromptError: If no default applies to the caller
    """
    if override:
        return override

    if isinstance(caller, Authenticated):
        message = USER_NO_DEFAULT_MESSAGE
        body = _single_default(db, caller.user_id, message)
        if body is not None:
            return body
    else:
        message = ANONYMOUS_NO_DEFAULT_MESSAGE

    body = _single_default(db, None, message)
    if body is None:
        raise NoDefaultPromptError(message)
    return body
