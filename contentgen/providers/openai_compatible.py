"""Content generator for backends speaking the OpenAI chat-completions API.

One adapter serves OpenAI, OpenRouter, DeepSeek and GLM; they differ only
in base URL and credentials.

Known limitations:
- Tools are never sent and responses are never read for tool calls.
- Only text parts are translated; inline data and file references are dropped.
- The backend is called single-shot; streaming yields one complete response.
- Token counting and embeddings return empty results.
"""
import logging
import uuid
from typing import Any, AsyncIterator, Dict, List, Optional

import httpx

from contentgen.errors import ProviderHTTPError
from contentgen.models import (
    Candidate,
    Content,
    CountTokensRequest,
    CountTokensResponse,
    EmbedContentRequest,
    EmbedContentResponse,
    GenerateContentResponse,
    GenerateRequest,
    Part,
    Role,
    UsageMetadata,
    to_contents,
)
from contentgen.providers.base import ContentGenerator
from contentgen.streaming import one_shot_stream

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 180.0

# Canonical role -> wire role. Anything not listed is sent as "user".
_ROLE_TO_WIRE = {Role.MODEL.value: "assistant"}
_WIRE_TO_ROLE = {"assistant": Role.MODEL.value}


def role_to_wire(role: Optional[str]) -> str:
    """Map a canonical role to its chat-completions role."""
    return _ROLE_TO_WIRE.get(role, "user")


def role_from_wire(role: Optional[str]) -> str:
    """Map a chat-completions role back to the canonical vocabulary."""
    return _WIRE_TO_ROLE.get(role, Role.USER.value)


def _token_count(usage: Dict[str, Any], key: str) -> Optional[int]:
    """Integer token count from a wire usage object, or None when absent or malformed."""
    value = usage.get(key)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


class OpenAICompatibleContentGenerator(ContentGenerator):
    """Content generator over ``POST {base_url}/chat/completions``."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        model: str,
        http_headers: Optional[Dict[str, str]] = None,
        proxy: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.default_model = model
        self._headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {api_key}",
            **(http_headers or {}),
        }
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(proxy=proxy, timeout=timeout)

    async def aclose(self) -> None:
        """Close the HTTP client if this generator created it."""
        if self._owns_client:
            await self._client.aclose()

    async def generate_content(
        self,
        request: GenerateRequest,
        user_prompt_id: str,
    ) -> GenerateContentResponse:
        request_id = str(uuid.uuid4())[:8]
        model = request.model or self.default_model
        messages = self._convert_contents(to_contents(request.contents))
        config = request.config

        body: Dict[str, Any] = {
            "model": model,
            "messages": messages,
            "temperature": config.temperature if config else None,
            "top_p": config.top_p if config else None,
            "tools": self._convert_tools(config.tools if config else None),
            "stream": False,
        }
        body = {key: value for key, value in body.items() if value is not None}

        logger.debug(
            "[%s] Chat completion: base_url=%s model=%s messages=%d prompt=%s",
            request_id, self.base_url, model, len(messages), user_prompt_id,
        )
        response = await self._client.post(
            f"{self.base_url}/chat/completions",
            headers=self._headers,
            json=body,
        )
        if not response.is_success:
            logger.warning(
                "[%s] Chat completion failed with HTTP %d", request_id, response.status_code,
            )
            raise ProviderHTTPError(response.status_code, response.text)

        try:
            data = response.json()
        except ValueError:
            logger.warning("[%s] Response body is not JSON, treating it as empty", request_id)
            data = {}
        return self._from_chat_completion(data, model)

    async def generate_content_stream(
        self,
        request: GenerateRequest,
        user_prompt_id: str,
    ) -> AsyncIterator[GenerateContentResponse]:
        return one_shot_stream(lambda: self.generate_content(request, user_prompt_id))

    async def count_tokens(self, request: CountTokensRequest) -> CountTokensResponse:
        # No token counting endpoint across this backend family; 0 means unknown.
        return CountTokensResponse(total_tokens=0)

    async def embed_content(self, request: EmbedContentRequest) -> EmbedContentResponse:
        return EmbedContentResponse(embeddings=[])

    @staticmethod
    def _convert_contents(contents: List[Content]) -> List[Dict[str, str]]:
        """Convert canonical Contents to chat-completions messages."""
        return [
            {
                "role": role_to_wire(content.role),
                "content": OpenAICompatibleContentGenerator._parts_to_text(content.parts or []),
            }
            for content in contents
        ]

    @staticmethod
    def _parts_to_text(parts: List[Part]) -> str:
        """Join the text of each part on its own line, skipping parts without text."""
        return "\n".join(part.text for part in parts if part.text)

    @staticmethod
    def _convert_tools(tools: Optional[List[Any]]) -> None:
        """Tool declarations are not translated for this backend family."""
        if tools:
            logger.debug("Dropping %d tool declaration(s): not supported on this backend", len(tools))
        return None

    @staticmethod
    def _from_chat_completion(data: Any, model: str) -> GenerateContentResponse:
        """Convert a chat-completions response body to the canonical response."""
        if not isinstance(data, dict):
            data = {}

        text = ""
        choices = data.get("choices")
        if isinstance(choices, list) and choices and isinstance(choices[0], dict):
            message = choices[0].get("message")
            if isinstance(message, dict) and isinstance(message.get("content"), str):
                text = message["content"]

        usage = data.get("usage")
        if not isinstance(usage, dict):
            usage = {}

        return GenerateContentResponse(
            model_version=model,
            candidates=[
                Candidate(
                    content=Content(
                        role=Role.MODEL.value,
                        parts=[Part(text=text)] if text else [],
                    ),
                    index=0,
                )
            ],
            usage_metadata=UsageMetadata(
                prompt_token_count=_token_count(usage, "prompt_tokens"),
                candidates_token_count=_token_count(usage, "completion_tokens"),
                total_token_count=_token_count(usage, "total_tokens"),
            ),
        )
