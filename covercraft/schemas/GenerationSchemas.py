from pydantic import BaseModel
from typing import Optional


class GenerationRequest(BaseModel):
    """Ephemeral input for one generation call.

    Required fields are optional here so a missing value surfaces as our own
    400 "Missing required fields" instead of a framework validation error.
    """
    jobTitle: Optional[str] = None
    jobDescription: Optional[str] = None
    resumeText: Optional[str] = None
    promptOverride: Optional[str] = None
