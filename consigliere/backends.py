"""Model backends: direct Gemini API or a LiteLLM chat-completions proxy."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx
from google import genai
from google.genai import types

from consigliere.errors import BackendError
from consigliere.schemas import AgentDefinition, BackendConfig, BackendMode

logger = logging.getLogger(__name__)

CHAT_COMPLETIONS_PATH = "/v1/chat/completions"

# Sampling parameters sent to the proxy
TEMPERATURE = 0.7
MAX_TOKENS = 4000


class Backend(ABC):
    """Produces a model response for an agent and a user prompt."""

    name: str = ""

    @abstractmethod
    async def invoke(self, agent: AgentDefinition, prompt: str) -> str:
        """Run one generation and return the response text.

        Raises:
            BackendError: the call did not complete successfully
        """
        ...


class GeminiBackend(Backend):
    """Calls the Gemini API directly via google-genai."""

    name = "gemini"

    def __init__(self, api_key: str, client: genai.Client | None = None):
        self.client = client or genai.Client(api_key=api_key)

    async def invoke(self, agent: AgentDefinition, prompt: str) -> str:
        try:
            response = await self.client.aio.models.generate_content(
                model=agent.model_id,
                contents=prompt,
                config=types.GenerateContentConfig(
                    system_instruction=agent.system_prompt,
                ),
            )
            text = response.text
            if not text:
                raise ValueError("response contained no text")
            return text

        except Exception as e:
            logger.error(f"Gemini API call failed: {e}")
            raise BackendError(f"Gemini API request failed: {e}") from e


class LiteLLMBackend(Backend):
    """Calls an OpenAI-compatible chat-completions endpoint (LiteLLM proxy)."""

    name = "litellm"

    def __init__(
        self,
        base_url: str,
        api_key: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self._transport = transport

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}{CHAT_COMPLETIONS_PATH}"

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    @staticmethod
    def build_payload(agent: AgentDefinition, prompt: str) -> dict[str, Any]:
        """Build the chat-completions request body."""
        return {
            "model": agent.model_id,
            "messages": [
                {"role": "system", "content": agent.system_prompt},
                {"role": "user", "content": prompt},
            ],
            "temperature": TEMPERATURE,
            "max_tokens": MAX_TOKENS,
        }

    async def invoke(self, agent: AgentDefinition, prompt: str) -> str:
        try:
            # No client-side timeout: wait for the full completion
            async with httpx.AsyncClient(timeout=None, transport=self._transport) as client:
                response = await client.post(
                    self.endpoint,
                    headers=self._headers(),
                    json=self.build_payload(agent, prompt),
                )
        except httpx.HTTPError as e:
            logger.error(f"LiteLLM call failed: {e}")
            raise BackendError(f"LiteLLM request failed: {e}") from e

        if not response.is_success:
            logger.error(f"LiteLLM HTTP error: {response.status_code}")
            raise BackendError(
                f"LiteLLM request failed: LiteLLM API error: {response.status_code} - {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            data = response.json()
            content = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logger.error(f"LiteLLM returned malformed response: {e!r}")
            raise BackendError(
                f"LiteLLM request failed: malformed response ({e!r})",
                status_code=response.status_code,
                body=response.text,
            ) from e

        if not isinstance(content, str):
            raise BackendError(
                f"LiteLLM request failed: response message content is not text ({type(content).__name__})",
                status_code=response.status_code,
                body=response.text,
            )
        return content


def create_backend(config: BackendConfig) -> Backend:
    """Select the backend implementation for this process."""
    if config.mode == BackendMode.PROXY:
        logger.info(f"Using LiteLLM proxy at: {config.base_url}")
        return LiteLLMBackend(base_url=config.base_url, api_key=config.api_key)

    logger.info("Using direct Gemini API")
    return GeminiBackend(api_key=config.api_key or "")
