"""LLM client implementations."""

from namesweep.llm.base import BaseLLMClient
from namesweep.llm.openai_client import OpenAIClient
from namesweep.llm.anthropic_client import AnthropicClient

__all__ = ["BaseLLMClient", "OpenAIClient", "AnthropicClient"]
