"""Build the content generator for a resolved configuration."""
import logging
import platform
import sys
from typing import Dict, Optional

from contentgen import __version__
from contentgen.config import AuthType, ContentGeneratorConfig, RuntimeConfig
from contentgen.errors import ContentGeneratorError, UnsupportedAuthTypeError
from contentgen.model_check import get_effective_model
from contentgen.providers.base import ContentGenerator
from contentgen.providers.google_genai import GoogleGenAIContentGenerator
from contentgen.providers.logging_generator import LoggingContentGenerator
from contentgen.providers.openai_compatible import OpenAICompatibleContentGenerator
from contentgen.providers.registry import BackendRegistry, BuildContext
from contentgen.telemetry import TelemetrySink

logger = logging.getLogger(__name__)

OPENAI_COMPATIBLE_AUTH_TYPES = (
    AuthType.USE_OPENAI,
    AuthType.USE_OPENROUTER,
    AuthType.USE_DEEPSEEK,
    AuthType.USE_GLM,
)


def default_http_headers() -> Dict[str, str]:
    """Static client identification headers sent to every backend."""
    return {"User-Agent": f"ContentGen/{__version__} ({sys.platform}; {platform.machine()})"}


async def build_interactive(
    config: ContentGeneratorConfig,
    session: RuntimeConfig,
    context: BuildContext,
) -> ContentGenerator:
    """Placeholder for Google login and Cloud Shell backends.

    Those credential flows live outside this package; a host application
    registers its own builder for them on the registry it passes in.
    """
    raise ContentGeneratorError(
        f"Auth type '{config.auth_type.value}' needs an interactive credential backend; "
        f"register a builder for it with BackendRegistry.register()"
    )


async def build_google_genai(
    config: ContentGeneratorConfig,
    session: RuntimeConfig,
    context: BuildContext,
) -> ContentGenerator:
    """Gemini API (API key) or Vertex AI backend through the genai SDK."""
    if config.vertexai is None:
        raise UnsupportedAuthTypeError(
            config.auth_type, "no Gemini API key or Google Cloud project was found",
        )
    model = config.model
    if config.auth_type is AuthType.USE_GEMINI and config.api_key:
        model = await get_effective_model(config.api_key, config.model, config.proxy)
    return GoogleGenAIContentGenerator.from_credentials(
        model=model,
        api_key=config.api_key,
        vertexai=config.vertexai,
        project=config.project,
        location=config.location,
        http_headers=context.http_headers,
    )


async def build_openai_compatible(
    config: ContentGeneratorConfig,
    session: RuntimeConfig,
    context: BuildContext,
) -> ContentGenerator:
    """Any backend speaking the OpenAI chat-completions API."""
    if config.provider is None or not config.base_url or not config.api_key:
        raise UnsupportedAuthTypeError(
            config.auth_type, "no API key was found for this provider",
        )
    logger.info(
        "Using OpenAI-compatible provider %s at %s", config.provider.value, config.base_url,
    )
    return OpenAICompatibleContentGenerator(
        base_url=config.base_url,
        api_key=config.api_key,
        model=config.model,
        http_headers=context.http_headers,
        proxy=config.proxy,
    )


def default_registry() -> BackendRegistry:
    """Registry with a builder for every AuthType."""
    registry = BackendRegistry()
    registry.register(AuthType.LOGIN_WITH_GOOGLE, build_interactive)
    registry.register(AuthType.CLOUD_SHELL, build_interactive)
    registry.register(AuthType.USE_GEMINI, build_google_genai)
    registry.register(AuthType.USE_VERTEX_AI, build_google_genai)
    for auth_type in OPENAI_COMPATIBLE_AUTH_TYPES:
        registry.register(auth_type, build_openai_compatible)
    return registry


async def create_content_generator(
    config: ContentGeneratorConfig,
    session: RuntimeConfig,
    session_id: Optional[str] = None,
    registry: Optional[BackendRegistry] = None,
    sink: Optional[TelemetrySink] = None,
) -> ContentGenerator:
    """Build the generator selected by ``config.auth_type``.

    The result is always wrapped in a LoggingContentGenerator.

    Raises:
        UnsupportedAuthTypeError: If the auth type has no builder, or the
            configuration lacks what the selected backend needs.
    """
    builder = (registry or default_registry()).get(config.auth_type)
    context = BuildContext(http_headers=default_http_headers(), session_id=session_id)
    generator = await builder(config, session, context)
    logger.debug(
        "Created %s for auth type %s (session=%s)",
        type(generator).__name__, config.auth_type.value, session_id,
    )
    model = getattr(generator, "default_model", None) or config.model
    return LoggingContentGenerator(generator, model, sink=sink)
