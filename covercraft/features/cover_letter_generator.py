"""
Cover Letter Generator

Resolves the prompt template, fills in the request variables and sends the
result to the generation model.
"""

from datetime import date
from typing import Optional
import logging

from sqlalchemy.orm import Session

from covercraft.core.errors import ValidationError
from covercraft.core.security import Authenticated, CallerIdentity
from covercraft.schemas.GenerationSchemas import GenerationRequest
from covercraft.services.generation_client import GenerationClient
from covercraft.services.prompt_resolver import resolve_prompt
from covercraft.services.prompt_variables import build_prompt_values, substitute

logger = logging.getLogger(__name__)


def build_final_prompt(db: Session, caller: CallerIdentity, request: GenerationRequest, today: Optional[date] = None) -> str:
    if not request.jobTitle or not request.jobDescription or not request.resumeText:
        raise ValidationError("Missing required fields")

    template = resolve_prompt(db, caller, request.promptOverride)
    values = build_prompt_values(request.jobTitle, request.jobDescription, request.resumeText, today)
    return substitute(template, values)


async def generate_cover_letter(
    db: Session,
    caller: CallerIdentity,
    request: GenerationRequest,
    client: GenerationClient,
    today: Optional[date] = None,
) -> str:
    """
    Generate a cover letter for one request.

    Args:
        db: Database session used for prompt lookup
        caller: Authenticated or Anonymous caller
        request: Job title, job description, resume text and optional override
        client: Generation client used for the single model call
        today: Date substituted for {date}; defaults to the current date

    Returns:
        The model's plain-text cover letter

    Raises:
        ValidationError, NoDefaultPromptError, RateLimitedError, GenerationFailedError
    """
    prompt = build_final_prompt(db, caller, request, today)
    logger.info(
        "Generating cover letter: caller=%s, override=%s, prompt_chars=%d",
        "user" if isinstance(caller, Authenticated) else "anonymous",
        bool(request.promptOverride),
        len(prompt),
    )
    return await client.generate(prompt)
