from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from covercraft.core.security import CallerIdentity, get_optional_caller
from covercraft.db.session import get_db
from covercraft.features.cover_letter_generator import generate_cover_letter
from covercraft.schemas.GenerationSchemas import GenerationRequest
from covercraft.services.generation_client import GenerationClient, get_generation_client

router = APIRouter()


@router.post("/generate-cover-letter", response_class=PlainTextResponse)
async def generate_cover_letter_endpoint(
    request: GenerationRequest,
    caller: CallerIdentity = Depends(get_optional_caller),
    db: Session = Depends(get_db),
    client: GenerationClient = Depends(get_generation_client),
):
    """
    Generate a cover letter as plain text.

    Uses `promptOverride` when given, otherwise the caller's default prompt,
    falling back to the global default. Responds 429 when the model provider
    is rate limiting.
    """
    text = await generate_cover_letter(db, caller, request, client)
    return PlainTextResponse(text)
