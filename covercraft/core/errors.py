"""
Error taxonomy shared by services and endpoints.

Every error raised on purpose by the application derives from CoverCraftError
and carries the HTTP status it maps to. The exception handlers registered in
main.py render all of them as {"error": message}.
"""

from typing import Optional


class CoverCraftError(Exception):
    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class UnauthorizedError(CoverCraftError):
    status_code = 401
    default_message = "Unauthorized"


class ValidationError(CoverCraftError):
    status_code = 400
    default_message = "Missing required fields"


class NotFoundError(CoverCraftError):
    status_code = 404
    default_message = "Not found"


class NoDefaultPromptError(CoverCraftError):
    status_code = 404
    default_message = "No default prompt found"


class RateLimitedError(CoverCraftError):
    status_code = 429
    default_message = "Rate limit exceeded. Please try again later."


class GenerationFailedError(CoverCraftError):
    status_code = 500
    default_message = "Failed to generate cover letter"


class StorageError(CoverCraftError):
    status_code = 502
    default_message = "Object storage request failed"
