"""Pytest configuration and fixtures."""

from typing import Optional, Union

import pytest

from namesweep.llm.base import BaseLLMClient


class ScriptedLLMClient(BaseLLMClient):
    """Fake client that replays queued responses or raises queued exceptions."""

    def __init__(self, responses: list[Union[str, Exception]], model: str = "fake-model"):
        super().__init__(api_key="test-key", model=model)
        self.responses = list(responses)
        self.prompts: list[str] = []
        self.closed = False

    async def complete(self, prompt: str, system_prompt: Optional[str] = None) -> str:
        self.prompts.append(prompt)
        if not self.responses:
            raise AssertionError("ScriptedLLMClient ran out of responses")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def scripted_client():
    """Return a factory for scripted fake LLM clients."""
    return ScriptedLLMClient


@pytest.fixture
def clean_env(monkeypatch):
    """Remove provider credentials and namesweep settings from the environment."""
    for name in (
        "GEMINI_API_KEY",
        "OPENAI_API_KEY",
        "ANTHROPIC_API_KEY",
        "PASS1_MODEL",
        "PASS2_MODEL",
        "NAMESWEEP_PASS1_MODEL",
        "NAMESWEEP_PASS2_MODEL",
        "NAMESWEEP_LLM_PROVIDER",
        "NAMESWEEP_LLM_API_KEY",
        "NAMESWEEP_LLM_BASE_URL",
        "NAMESWEEP_CHUNK_SIZE",
        "NAMESWEEP_LANGUAGE",
        "NAMESWEEP_RENAME_SINGLE_SWEEP",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def obfuscated_code() -> str:
    """Return a small obfuscated JavaScript snippet."""
    return """var a = 0;
function b(c) {
    return c + a;
}
var alpha = b(1);
var d = [a, alpha];
console.log(d);"""
