"""API call telemetry events and sinks."""
import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from contentgen.models import UsageMetadata

logger = logging.getLogger(__name__)


@dataclass
class ApiRequestEvent:
    model: str
    prompt_id: str
    request_text: str


@dataclass
class ApiResponseEvent:
    model: str
    prompt_id: str
    duration_ms: int
    usage: Optional[UsageMetadata] = None
    response_text: str = ""


@dataclass
class ApiErrorEvent:
    model: str
    prompt_id: str
    duration_ms: int
    error_type: str
    error: str


class TelemetrySink(Protocol):
    """Receives the boundaries of every generation call."""

    def on_request(self, event: ApiRequestEvent) -> None: ...

    def on_response(self, event: ApiResponseEvent) -> None: ...

    def on_error(self, event: ApiErrorEvent) -> None: ...


class LoggingTelemetrySink:
    """Writes telemetry events to the ``contentgen.telemetry`` logger."""

    def on_request(self, event: ApiRequestEvent) -> None:
        logger.debug(
            "API request: model=%s prompt=%s chars=%d",
            event.model, event.prompt_id, len(event.request_text),
        )

    def on_response(self, event: ApiResponseEvent) -> None:
        usage = event.usage
        logger.info(
            "API response: model=%s prompt=%s duration_ms=%d input_tokens=%s output_tokens=%s total_tokens=%s",
            event.model, event.prompt_id, event.duration_ms,
            usage.prompt_token_count if usage else None,
            usage.candidates_token_count if usage else None,
            usage.total_token_count if usage else None,
        )

    def on_error(self, event: ApiErrorEvent) -> None:
        logger.error(
            "API error: model=%s prompt=%s duration_ms=%d %s: %s",
            event.model, event.prompt_id, event.duration_ms, event.error_type, event.error,
        )
