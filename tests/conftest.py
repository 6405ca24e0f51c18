"""Shared fixtures: a scripted chat provider and a clean provider environment."""

import pytest

from providers.base import LLMProvider


class ScriptedProvider(LLMProvider):
    """Returns queued replies in order and records every call.

    A queued Exception is raised; a queued callable is called with the
    messages and its return value is the reply.
    """

    def __init__(self, *replies):
        self.replies = list(replies)
        self.calls = []

    @property
    def name(self) -> str:
        return "scripted"

    @property
    def default_model(self) -> str:
        return "scripted-model"

    def complete(self, messages, temperature=0.7, max_tokens=1200):
        self.calls.append({"messages": messages, "temperature": temperature, "max_tokens": max_tokens})
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        if callable(reply):
            return reply(messages)
        return reply


@pytest.fixture
def scripted():
    """Factory: scripted(reply1, reply2, ...) -> ScriptedProvider."""
    return ScriptedProvider


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """No provider variables in the environment and no .env file in cwd."""
    for var in (
        "OPENAI_API_KEY", "OPENAI_BASE_URL", "OPENAI_MODEL",
        "IDEA_FORGE_OPENAI_API_KEY", "IDEA_FORGE_OPENAI_BASE_URL", "IDEA_FORGE_OPENAI_MODEL",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch
