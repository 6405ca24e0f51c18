"""Error taxonomy for provider calls and response handling.

Every failure surfaced to the caller is a ForgeError carrying a
machine-readable code and a human-readable message.
"""

from typing import Optional


class ForgeError(Exception):
    """Base class for all Idea Forge errors."""

    code = "UNKNOWN_ERROR"

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class MissingCredential(ForgeError):
    """No API key in the override, stored settings or environment."""

    code = "NO_API_KEY"

    def __init__(self, message: str = "API key not found. Provide it in settings or `.env`."):
        super().__init__(message)


class HttpFailure(ForgeError):
    """The provider answered with a non-2xx status."""

    def __init__(self, status: int, body: str = ""):
        super().__init__(f"AI request failed ({status}): {body}", code=f"HTTP_{status}")
        self.status = status
        self.body = body

    @property
    def is_rate_limited(self) -> bool:
        return self.status == 429

    @property
    def is_auth_error(self) -> bool:
        return self.status in (401, 403)


class NoContent(ForgeError):
    """The provider answered 2xx but without message content."""

    code = "NO_CONTENT"

    def __init__(self, message: str = "AI response is missing content."):
        super().__init__(message)


class UnparsableResponse(ForgeError):
    """No recovery strategy found JSON in the response."""

    code = "INVALID_JSON"

    def __init__(self, context: str):
        super().__init__(f"Failed to parse AI JSON response ({context}).")
        self.context = context


class InvalidResponseShape(ForgeError):
    """Recovered JSON is not the expected top-level shape."""

    code = "INVALID_RESPONSE"


class TransportError(ForgeError):
    """Network-level failure: DNS, timeout, connection reset."""

    code = "TRANSPORT_ERROR"


class InvalidTransition(ForgeError):
    """An idea status change not allowed by the lifecycle."""

    code = "INVALID_TRANSITION"


class NotFound(ForgeError):
    """Lookup by id failed."""

    code = "NOT_FOUND"


class IdeaNotFound(NotFound):
    def __init__(self, idea_id: str):
        super().__init__(f"No idea with id {idea_id} in the active set.")
        self.idea_id = idea_id


class BatchNotFound(NotFound):
    def __init__(self, batch_id: str):
        super().__init__(f"No stored batch with id {batch_id}.")
        self.batch_id = batch_id
