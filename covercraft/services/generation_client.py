"""
Generation Client

Thin wrapper around the Gemini API. One attempt per call; failures are
translated into RateLimitedError or GenerationFailedError.
"""

from typing import Any, Optional
import logging

from google import genai

from covercraft.core.config import settings
from covercraft.core.errors import CoverCraftError, GenerationFailedError, RateLimitedError

logger = logging.getLogger(__name__)

RATE_LIMIT_MARKER = "RESOURCE_EXHAUSTED"


def is_rate_limited(error: Any) -> bool:
    """True when a provider error signals quota exhaustion (HTTP 429 / RESOURCE_EXHAUSTED)."""
    for attr in ("code", "status", "status_code"):
        value = getattr(error, attr, None)
        if value == 429 or value == "429":
            return True
        if isinstance(value, str) and RATE_LIMIT_MARKER in value:
            return True

    message = getattr(error, "message", None)
    if isinstance(message, str) and RATE_LIMIT_MARKER in message:
        return True
    return RATE_LIMIT_MARKER in str(error)


def classify_generation_error(error: Exception) -> CoverCraftError:
    if is_rate_limited(error):
        return RateLimitedError()
    return GenerationFailedError()


class GenerationClient:
    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None, client: Optional[Any] = None):
        self.api_key = settings.GOOGLE_API_KEY if api_key is None else api_key
        self.model = model or settings.GENERATION_MODEL
        self._client = client

    @property
    def client(self):
        """Lazy initialization of the Gemini client"""
        if self._client is None:
            if not self.api_key:
                logger.error("GOOGLE_API_KEY is not configured")
                raise GenerationFailedError("Generation model is not configured")
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    async def generate(self, prompt: str) -> str:
        """Send the final prompt and return the model's full text response."""
        client = self.client
        try:
            response = await client.aio.models.generate_content(model=self.model, contents=prompt)
        except Exception as e:
            logger.error("Gemini call failed (%s): %s", type(e).__name__, e)
            raise classify_generation_error(e) from e

        text = getattr(response, "text", None)
        if not text:
            logger.warning("Gemini returned an empty response for model %s", self.model)
            raise GenerationFailedError("The model returned an empty response")
        return text


def get_generation_client() -> GenerationClient:
    return GenerationClient()
