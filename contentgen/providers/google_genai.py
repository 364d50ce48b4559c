"""Gemini API / Vertex AI content generator using the google-genai SDK."""
import logging
from typing import AsyncIterator, Dict, Optional

from google import genai
from google.genai import types as genai_types

from contentgen.config import DEFAULT_GEMINI_EMBEDDING_MODEL
from contentgen.models import (
    CountTokensRequest,
    CountTokensResponse,
    EmbedContentRequest,
    EmbedContentResponse,
    GenerateContentResponse,
    GenerateRequest,
    to_contents,
)
from contentgen.providers.base import ContentGenerator

logger = logging.getLogger(__name__)


class GoogleGenAIContentGenerator(ContentGenerator):
    """Content generator backed by ``genai.Client().aio.models``.

    The canonical model is the genai type system, so requests pass through
    with only the default model filled in. Streaming is native.
    """

    def __init__(self, client: genai.Client, model: str):
        self._models = client.aio.models
        self.default_model = model

    @classmethod
    def from_credentials(
        cls,
        model: str,
        api_key: Optional[str] = None,
        vertexai: Optional[bool] = None,
        project: Optional[str] = None,
        location: Optional[str] = None,
        http_headers: Optional[Dict[str, str]] = None,
    ) -> "GoogleGenAIContentGenerator":
        """Create a generator with its own genai client."""
        # Vertex AI rejects api_key together with project/location.
        if vertexai and api_key:
            project = location = None
        client = genai.Client(
            api_key=api_key or None,
            vertexai=vertexai,
            project=project,
            location=location,
            http_options=genai_types.HttpOptions(headers=http_headers or {}),
        )
        logger.info(
            "Created genai client (vertexai=%s) with default model %s", bool(vertexai), model,
        )
        return cls(client, model)

    async def generate_content(
        self,
        request: GenerateRequest,
        user_prompt_id: str,
    ) -> GenerateContentResponse:
        return await self._models.generate_content(
            model=request.model or self.default_model,
            contents=to_contents(request.contents),
            config=request.config,
        )

    async def generate_content_stream(
        self,
        request: GenerateRequest,
        user_prompt_id: str,
    ) -> AsyncIterator[GenerateContentResponse]:
        return await self._models.generate_content_stream(
            model=request.model or self.default_model,
            contents=to_contents(request.contents),
            config=request.config,
        )

    async def count_tokens(self, request: CountTokensRequest) -> CountTokensResponse:
        return await self._models.count_tokens(
            model=request.model or self.default_model,
            contents=to_contents(request.contents),
        )

    async def embed_content(self, request: EmbedContentRequest) -> EmbedContentResponse:
        return await self._models.embed_content(
            model=request.model or DEFAULT_GEMINI_EMBEDDING_MODEL,
            contents=to_contents(request.contents),
        )
