"""OpenAI-compatible LLM client implementation.

Also used for Gemini, which exposes an OpenAI-compatible chat completions endpoint.
"""

from typing import Any, Optional

from openai import AsyncOpenAI

from namesweep.llm.base import BaseLLMClient


class OpenAIClient(BaseLLMClient):
    """OpenAI API client."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o",
        base_url: Optional[str] = None,
        max_tokens: int = 8192,
        temperature: float = 0.3,
    ):
        super().__init__(api_key, model, base_url, max_tokens, temperature)
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
        )

    async def complete(self, prompt: str, system_prompt: Optional[str] = None) -> str:
        """Send a completion request to an OpenAI-compatible endpoint.

        Args:
            prompt: The user prompt to send
            system_prompt: Optional system prompt

        Returns:
            The LLM's response text
        """
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        response = await self._client.chat.completions.create(
            model=self.model,
            messages=messages,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
        )

        content = self._extract_content_from_response(response)
        if content is None or not content.strip():
            error_detail = self._describe_unusable_response(response)
            raise ValueError(
                "OpenAI-compatible API returned no usable content. "
                f"response_type={type(response).__name__}. {error_detail}"
            )
        return content

    @staticmethod
    def _extract_content_from_response(response: Any) -> Optional[str]:
        """Extract the first choice's message text, joining structured parts if needed."""
        choices = getattr(response, "choices", None)
        if not choices:
            return None

        message = getattr(choices[0], "message", None)
        content = getattr(message, "content", None)
        if isinstance(content, str):
            return content

        # Some compatible endpoints return a list of typed parts.
        if isinstance(content, list):
            parts = [getattr(part, "text", None) for part in content]
            text = "".join(part for part in parts if isinstance(part, str))
            return text or None

        return None

    @staticmethod
    def _describe_unusable_response(response: Any) -> str:
        """Report why a response carried no text, when the provider says so."""
        choices = getattr(response, "choices", None)
        if choices:
            finish_reason = getattr(choices[0], "finish_reason", None)
            if finish_reason:
                return f"finish_reason={finish_reason}"
        return "provider did not include a finish reason"

    async def close(self) -> None:
        """Close the OpenAI client."""
        await self._client.close()
