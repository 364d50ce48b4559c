"""Base content generator interface."""
from abc import ABC, abstractmethod
from typing import AsyncIterator

from contentgen.models import (
    CountTokensRequest,
    CountTokensResponse,
    EmbedContentRequest,
    EmbedContentResponse,
    GenerateContentResponse,
    GenerateRequest,
)


class ContentGenerator(ABC):
    """Abstract base class for content generators.

    Each implementation translates between the canonical request/response
    models and one backend's native API. Generators hold no per-call state
    and may serve concurrent calls.
    """

    @abstractmethod
    async def generate_content(
        self,
        request: GenerateRequest,
        user_prompt_id: str,
    ) -> GenerateContentResponse:
        """Return the complete response for ``request``."""
        ...

    @abstractmethod
    async def generate_content_stream(
        self,
        request: GenerateRequest,
        user_prompt_id: str,
    ) -> AsyncIterator[GenerateContentResponse]:
        """Return an async iterator of response chunks for ``request``."""
        ...

    @abstractmethod
    async def count_tokens(self, request: CountTokensRequest) -> CountTokensResponse:
        ...

    @abstractmethod
    async def embed_content(self, request: EmbedContentRequest) -> EmbedContentResponse:
        ...

    async def aclose(self) -> None:
        """Release network resources held by the generator."""
        return None
