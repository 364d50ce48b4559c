"""Backend configuration resolution.

This is the only module that reads process environment. Everything
downstream receives the immutable ContentGeneratorConfig built here.
"""
import enum
import logging
import os
from pathlib import Path
from typing import Dict, Mapping, NamedTuple, Optional, Protocol, Tuple, Union

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

DEFAULT_GEMINI_MODEL = "gemini-2.5-pro"
DEFAULT_GEMINI_FLASH_MODEL = "gemini-2.5-flash"
DEFAULT_GEMINI_EMBEDDING_MODEL = "gemini-embedding-001"


class AuthType(str, enum.Enum):
    """Authentication selectors, one per way of reaching a backend."""
    LOGIN_WITH_GOOGLE = "oauth-personal"
    USE_GEMINI = "gemini-api-key"
    USE_VERTEX_AI = "vertex-ai"
    CLOUD_SHELL = "cloud-shell"
    USE_OPENAI = "openai"
    USE_OPENROUTER = "openrouter"
    USE_DEEPSEEK = "deepseek"
    USE_GLM = "glm"


class Provider(str, enum.Enum):
    """Backends speaking the OpenAI chat-completions wire format."""
    OPENAI = "openai"
    OPENROUTER = "openrouter"
    DEEPSEEK = "deepseek"
    GLM = "glm"


class ProviderEnv(NamedTuple):
    """Where a provider's credentials and endpoint come from."""
    provider: Provider
    api_key_envs: Tuple[str, ...]
    base_url_env: str
    default_base_url: str


# Key env vars are listed in precedence order; later names are aliases.
OPENAI_COMPATIBLE_ENV: Dict[AuthType, ProviderEnv] = {
    AuthType.USE_OPENAI: ProviderEnv(
        Provider.OPENAI, ("OPENAI_API_KEY",), "OPENAI_BASE_URL",
        "https://api.openai.com/v1",
    ),
    AuthType.USE_OPENROUTER: ProviderEnv(
        Provider.OPENROUTER, ("OPENROUTER_API_KEY",), "OPENROUTER_BASE_URL",
        "https://openrouter.ai/api/v1",
    ),
    AuthType.USE_DEEPSEEK: ProviderEnv(
        Provider.DEEPSEEK, ("DEEPSEEK_API_KEY",), "DEEPSEEK_BASE_URL",
        "https://api.deepseek.com",
    ),
    AuthType.USE_GLM: ProviderEnv(
        Provider.GLM, ("GLM_API_KEY", "ZHIPUAI_API_KEY"), "GLM_BASE_URL",
        "https://open.bigmodel.cn/api/paas/v4",
    ),
}


class RuntimeConfig(Protocol):
    """Session-wide settings the resolver needs from its host."""

    def get_model(self) -> Optional[str]: ...

    def get_proxy(self) -> Optional[str]: ...


class SessionConfig(BaseModel):
    """Plain RuntimeConfig implementation used by the CLI and tests."""
    model: Optional[str] = None
    proxy: Optional[str] = None
    session_id: Optional[str] = None

    def get_model(self) -> Optional[str]:
        return self.model

    def get_proxy(self) -> Optional[str]:
        return self.proxy


class ContentGeneratorConfig(BaseModel):
    """Resolved backend configuration.

    Either every field the selected provider needs is present, or
    ``provider`` and ``base_url`` are both unset.
    """
    model_config = ConfigDict(frozen=True)

    model: str
    api_key: Optional[str] = None
    vertexai: Optional[bool] = None
    project: Optional[str] = None
    location: Optional[str] = None
    auth_type: Optional[AuthType] = None
    proxy: Optional[str] = None
    base_url: Optional[str] = None
    provider: Optional[Provider] = None


def load_environment(env_path: Optional[Union[str, Path]] = None) -> bool:
    """Load a .env file into the process environment.

    Defaults to ``.env`` in the working directory. Existing variables win.
    """
    path = Path(env_path) if env_path else Path.cwd() / ".env"
    if path.exists():
        load_dotenv(path)
        logger.info("Loaded environment variables from %s", path)
        return True
    logger.debug(".env file not found at %s", path)
    return False


def _first_set(env: Mapping[str, str], names: Tuple[str, ...]) -> Optional[str]:
    for name in names:
        value = env.get(name)
        if value:
            return value
    return None


def create_content_generator_config(
    session: RuntimeConfig,
    auth_type: Optional[AuthType],
    environ: Optional[Mapping[str, str]] = None,
) -> ContentGeneratorConfig:
    """Resolve the backend configuration for ``auth_type``.

    ``environ`` defaults to a snapshot of ``os.environ``. Resolution does no
    I/O; the Gemini model availability check runs in the factory.
    """
    env = dict(os.environ) if environ is None else dict(environ)

    fields = {
        "model": session.get_model() or DEFAULT_GEMINI_MODEL,
        "auth_type": auth_type,
        "proxy": session.get_proxy(),
    }

    # Interactive credentials: nothing else to resolve here.
    if auth_type in (AuthType.LOGIN_WITH_GOOGLE, AuthType.CLOUD_SHELL):
        return ContentGeneratorConfig(**fields)

    gemini_api_key = env.get("GEMINI_API_KEY") or None
    if auth_type is AuthType.USE_GEMINI and gemini_api_key:
        return ContentGeneratorConfig(**fields, api_key=gemini_api_key, vertexai=False)

    google_api_key = env.get("GOOGLE_API_KEY") or None
    project = env.get("GOOGLE_CLOUD_PROJECT") or None
    location = env.get("GOOGLE_CLOUD_LOCATION") or None
    if auth_type is AuthType.USE_VERTEX_AI and (google_api_key or (project and location)):
        return ContentGeneratorConfig(
            **fields,
            api_key=google_api_key,
            vertexai=True,
            project=project,
            location=location,
        )

    provider_env = OPENAI_COMPATIBLE_ENV.get(auth_type) if auth_type else None
    if provider_env is not None:
        api_key = _first_set(env, provider_env.api_key_envs)
        if api_key:
            return ContentGeneratorConfig(
                **fields,
                api_key=api_key,
                base_url=env.get(provider_env.base_url_env) or provider_env.default_base_url,
                provider=provider_env.provider,
            )
        logger.warning(
            "No API key found for %s (checked %s); falling back to default configuration",
            auth_type.value, ", ".join(provider_env.api_key_envs),
        )

    return ContentGeneratorConfig(**fields)
