"""Chat-completion provider layer: config resolution, transport, errors."""

from .base import LLMProvider, ChatMessage
from .config_resolver import resolve_provider_config
from .errors import (
    ForgeError,
    MissingCredential,
    HttpFailure,
    NoContent,
    UnparsableResponse,
    InvalidResponseShape,
    TransportError,
    InvalidTransition,
    NotFound,
    IdeaNotFound,
    BatchNotFound,
)
from .factory import get_provider, describe_provider
from .openai_provider import OpenAIChatProvider

__all__ = [
    "LLMProvider",
    "ChatMessage",
    "OpenAIChatProvider",
    "resolve_provider_config",
    "get_provider",
    "describe_provider",
    "ForgeError",
    "MissingCredential",
    "HttpFailure",
    "NoContent",
    "UnparsableResponse",
    "InvalidResponseShape",
    "TransportError",
    "InvalidTransition",
    "NotFound",
    "IdeaNotFound",
    "BatchNotFound",
]
