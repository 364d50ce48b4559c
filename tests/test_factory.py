"""Tests for create_content_generator."""
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from contentgen.config import (
    DEFAULT_GEMINI_FLASH_MODEL,
    AuthType,
    ContentGeneratorConfig,
    Provider,
    SessionConfig,
    create_content_generator_config,
)
from contentgen.errors import ContentGeneratorError, UnsupportedAuthTypeError
from contentgen.factory import (
    create_content_generator,
    default_http_headers,
    default_registry,
)
from contentgen.providers.base import ContentGenerator
from contentgen.providers.google_genai import GoogleGenAIContentGenerator
from contentgen.providers.logging_generator import LoggingContentGenerator
from contentgen.providers.openai_compatible import OpenAICompatibleContentGenerator
from contentgen.providers.registry import BackendRegistry

pytestmark = pytest.mark.unit


@pytest.fixture
def session():
    return SessionConfig(model="test-model")


def openai_config(auth_type=AuthType.USE_OPENAI, provider=Provider.OPENAI):
    return ContentGeneratorConfig(
        model="test-model",
        auth_type=auth_type,
        api_key="sk-test",
        base_url="https://api.example.com/v1",
        provider=provider,
    )


class TestDefaultRegistry:

    @pytest.mark.parametrize("auth_type", list(AuthType))
    def test_every_auth_type_has_a_builder(self, auth_type):
        assert auth_type in default_registry()

    def test_user_agent_header(self):
        assert default_http_headers()["User-Agent"].startswith("ContentGen/")


class TestCreateContentGenerator:

    @pytest.mark.parametrize(
        "auth_type,provider",
        [
            (AuthType.USE_OPENAI, Provider.OPENAI),
            (AuthType.USE_OPENROUTER, Provider.OPENROUTER),
            (AuthType.USE_DEEPSEEK, Provider.DEEPSEEK),
            (AuthType.USE_GLM, Provider.GLM),
        ],
    )
    async def test_openai_compatible_backends(self, session, auth_type, provider):
        generator = await create_content_generator(openai_config(auth_type, provider), session)

        assert isinstance(generator, LoggingContentGenerator)
        assert isinstance(generator.wrapped, OpenAICompatibleContentGenerator)
        assert generator.wrapped.base_url == "https://api.example.com/v1"
        assert generator.wrapped.default_model == "test-model"
        assert generator.wrapped._headers["User-Agent"].startswith("ContentGen/")
        await generator.aclose()

    async def test_openai_selector_without_key_is_rejected(self, session):
        config = create_content_generator_config(session, AuthType.USE_OPENAI, environ={})

        with pytest.raises(UnsupportedAuthTypeError, match="Unsupported authType: openai"):
            await create_content_generator(config, session)

    @patch("contentgen.providers.google_genai.genai.Client")
    async def test_vertex_backend(self, mock_client_class, session):
        config = ContentGeneratorConfig(
            model="gemini-2.5-pro", auth_type=AuthType.USE_VERTEX_AI, vertexai=True,
            project="proj", location="us-central1",
        )

        generator = await create_content_generator(config, session)

        assert isinstance(generator, LoggingContentGenerator)
        assert isinstance(generator.wrapped, GoogleGenAIContentGenerator)
        assert mock_client_class.call_args.kwargs["vertexai"] is True

    @patch("contentgen.factory.get_effective_model", new_callable=AsyncMock)
    @patch("contentgen.providers.google_genai.genai.Client")
    async def test_gemini_backend_uses_effective_model(self, mock_client_class, mock_check, session):
        mock_check.return_value = DEFAULT_GEMINI_FLASH_MODEL
        config = ContentGeneratorConfig(
            model="gemini-2.5-pro", auth_type=AuthType.USE_GEMINI, api_key="g-key",
            vertexai=False, proxy="http://proxy",
        )

        generator = await create_content_generator(config, session)

        mock_check.assert_awaited_once_with("g-key", "gemini-2.5-pro", "http://proxy")
        assert generator.wrapped.default_model == DEFAULT_GEMINI_FLASH_MODEL
        assert mock_client_class.call_args.kwargs["api_key"] == "g-key"

    async def test_gemini_without_credentials_is_rejected(self, session):
        config = create_content_generator_config(session, AuthType.USE_GEMINI, environ={})

        with pytest.raises(UnsupportedAuthTypeError, match="gemini-api-key"):
            await create_content_generator(config, session)

    @pytest.mark.parametrize("auth_type", [AuthType.LOGIN_WITH_GOOGLE, AuthType.CLOUD_SHELL])
    async def test_interactive_without_registered_builder(self, session, auth_type):
        config = ContentGeneratorConfig(model="m", auth_type=auth_type)

        with pytest.raises(ContentGeneratorError, match="interactive credential backend"):
            await create_content_generator(config, session)

    async def test_registered_interactive_builder_is_wrapped(self, session):
        backend = MagicMock(spec=ContentGenerator)
        builder = AsyncMock(return_value=backend)
        registry = default_registry()
        registry.register(AuthType.LOGIN_WITH_GOOGLE, builder)
        config = ContentGeneratorConfig(model="m", auth_type=AuthType.LOGIN_WITH_GOOGLE)

        generator = await create_content_generator(config, session, session_id="s-1", registry=registry)

        assert isinstance(generator, LoggingContentGenerator)
        assert generator.wrapped is backend
        _, _, context = builder.call_args.args
        assert context.session_id == "s-1"
        assert "User-Agent" in context.http_headers

    async def test_missing_auth_type_fails_fast(self, session):
        config = ContentGeneratorConfig(model="m")

        with pytest.raises(UnsupportedAuthTypeError, match="Unsupported authType: None"):
            await create_content_generator(config, session)

    async def test_unregistered_auth_type_fails_fast(self, session):
        with pytest.raises(UnsupportedAuthTypeError):
            await create_content_generator(openai_config(), session, registry=BackendRegistry())
