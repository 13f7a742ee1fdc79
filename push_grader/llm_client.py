"""
Text completion client for the language model service.

Wraps the OpenAI SDK, pointed at Gemini's OpenAI-compatible endpoint by
default, and reduces every response to plain text or a typed error.
"""

import os
from typing import Protocol

import openai
from openai import OpenAI

from .config import LLM_BASE_URL, LLM_MODEL, MAX_TOKENS
from .errors import ConfigurationError, EmptyResponseError, LLMResponseError, MalformedResponseError


class TextModel(Protocol):
    """Anything that turns one prompt into text."""

    def complete(self, prompt: str, json_mode: bool = False) -> str: ...


class LLMClient:
    """
    Single-prompt text completion against a chat completions endpoint.
    """

    def __init__(
        self,
        model: str = LLM_MODEL,
        api_key: str | None = None,
        base_url: str | None = LLM_BASE_URL,
        client: OpenAI | None = None,
    ) -> None:
        """
        Initialize the LLM client.

        Args:
            model: Model name to request.
            api_key: API key. Falls back to GEMINI_API_KEY, then OPENAI_API_KEY.
            base_url: OpenAI-compatible endpoint; None uses the SDK default.
            client: Pre-built SDK client (used by tests).

        Raises:
            ConfigurationError: If no API key is provided or found in environment.
        """
        self.model = model

        if client is None:
            api_key = api_key or os.environ.get("GEMINI_API_KEY") or os.environ.get("OPENAI_API_KEY")
            if not api_key:
                raise ConfigurationError(
                    "GEMINI_API_KEY environment variable not set. Please add it as a GitHub Secret."
                )
            client = OpenAI(api_key=api_key, base_url=base_url)

        self.client = client

    def complete(self, prompt: str, json_mode: bool = False) -> str:
        """
        Send one prompt and return the model's text.

        Args:
            prompt: User prompt.
            json_mode: Ask the service for a JSON object response.

        Returns:
            Concatenated text of the first choice.

        Raises:
            LLMResponseError: If the request fails.
            EmptyResponseError: If the model returns no text.
            MalformedResponseError: If the response has no usable choice.
        """
        kwargs = {}
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        try:
            completion = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                max_tokens=MAX_TOKENS,
                **kwargs,
            )
        except openai.OpenAIError as e:
            raise LLMResponseError(f"Error generating content from {self.model}: {e}") from e

        choices = getattr(completion, "choices", None)
        if not choices:
            raise EmptyResponseError(f"{self.model} returned an empty response.")

        message = getattr(choices[0], "message", None)
        if message is None:
            raise MalformedResponseError(f"{self.model} returned a choice without a message.")

        content = message.content
        if isinstance(content, list):
            # Some compatible endpoints return content parts
            content = "".join(
                part.get("text", "") if isinstance(part, dict) else str(getattr(part, "text", ""))
                for part in content
            )
        if content is not None and not isinstance(content, str):
            raise MalformedResponseError(
                f"{self.model} returned content of type {type(content).__name__}."
            )
        if not content or not content.strip():
            raise EmptyResponseError(f"{self.model} did not return any content.")
        return content
