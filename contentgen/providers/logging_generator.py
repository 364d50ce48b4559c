"""Telemetry decorator for content generators."""
import time
from typing import AsyncIterator, List, Optional

from contentgen.models import (
    CountTokensRequest,
    CountTokensResponse,
    EmbedContentRequest,
    EmbedContentResponse,
    GenerateContentResponse,
    GenerateRequest,
    response_text,
    to_contents,
)
from contentgen.providers.base import ContentGenerator
from contentgen.telemetry import (
    ApiErrorEvent,
    ApiRequestEvent,
    ApiResponseEvent,
    LoggingTelemetrySink,
    TelemetrySink,
)


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


def _request_text(request: GenerateRequest) -> str:
    lines: List[str] = []
    for content in to_contents(request.contents):
        lines.extend(part.text for part in content.parts or [] if part.text)
    return "\n".join(lines)


class LoggingContentGenerator(ContentGenerator):
    """Forwards every call to the wrapped generator and reports telemetry.

    Arguments and results pass through untouched. Generation calls emit a
    request event, then a response or error event; errors are re-raised.
    """

    def __init__(
        self,
        wrapped: ContentGenerator,
        model: str,
        sink: Optional[TelemetrySink] = None,
    ):
        self.wrapped = wrapped
        self._model = model
        self._sink = sink or LoggingTelemetrySink()

    def _start(self, model: str, request: GenerateRequest, user_prompt_id: str) -> None:
        self._sink.on_request(ApiRequestEvent(
            model=model, prompt_id=user_prompt_id, request_text=_request_text(request),
        ))

    def _error(self, model: str, user_prompt_id: str, start: float, error: Exception) -> None:
        self._sink.on_error(ApiErrorEvent(
            model=model,
            prompt_id=user_prompt_id,
            duration_ms=_elapsed_ms(start),
            error_type=type(error).__name__,
            error=str(error),
        ))

    async def generate_content(
        self,
        request: GenerateRequest,
        user_prompt_id: str,
    ) -> GenerateContentResponse:
        model = request.model or self._model
        start = time.monotonic()
        try:
            self._start(model, request, user_prompt_id)
            response = await self.wrapped.generate_content(request, user_prompt_id)
        except Exception as e:
            self._error(model, user_prompt_id, start, e)
            raise
        self._sink.on_response(ApiResponseEvent(
            model=model,
            prompt_id=user_prompt_id,
            duration_ms=_elapsed_ms(start),
            usage=response.usage_metadata,
            response_text=response_text(response),
        ))
        return response

    async def generate_content_stream(
        self,
        request: GenerateRequest,
        user_prompt_id: str,
    ) -> AsyncIterator[GenerateContentResponse]:
        model = request.model or self._model
        start = time.monotonic()
        try:
            self._start(model, request, user_prompt_id)
            stream = await self.wrapped.generate_content_stream(request, user_prompt_id)
        except Exception as e:
            self._error(model, user_prompt_id, start, e)
            raise
        return self._observe_stream(stream, model, user_prompt_id, start)

    async def _observe_stream(
        self,
        stream: AsyncIterator[GenerateContentResponse],
        model: str,
        user_prompt_id: str,
        start: float,
    ) -> AsyncIterator[GenerateContentResponse]:
        texts: List[str] = []
        last: Optional[GenerateContentResponse] = None
        try:
            async for chunk in stream:
                last = chunk
                texts.append(response_text(chunk))
                yield chunk
        except Exception as e:
            self._error(model, user_prompt_id, start, e)
            raise
        self._sink.on_response(ApiResponseEvent(
            model=model,
            prompt_id=user_prompt_id,
            duration_ms=_elapsed_ms(start),
            usage=last.usage_metadata if last is not None else None,
            response_text="".join(texts),
        ))

    async def count_tokens(self, request: CountTokensRequest) -> CountTokensResponse:
        return await self.wrapped.count_tokens(request)

    async def embed_content(self, request: EmbedContentRequest) -> EmbedContentResponse:
        return await self.wrapped.embed_content(request)

    async def aclose(self) -> None:
        await self.wrapped.aclose()
