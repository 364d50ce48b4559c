"""Provider-agnostic content generation."""
__version__ = "0.1.0"

from contentgen.config import (  # noqa: E402
    AuthType,
    ContentGeneratorConfig,
    Provider,
    SessionConfig,
    create_content_generator_config,
)
from contentgen.errors import (  # noqa: E402
    ContentGeneratorError,
    ProviderHTTPError,
    UnsupportedAuthTypeError,
)
from contentgen.factory import create_content_generator  # noqa: E402
from contentgen.models import GenerateRequest  # noqa: E402
from contentgen.providers.base import ContentGenerator  # noqa: E402

__all__ = [
    "AuthType",
    "ContentGenerator",
    "ContentGeneratorConfig",
    "ContentGeneratorError",
    "GenerateRequest",
    "Provider",
    "ProviderHTTPError",
    "SessionConfig",
    "UnsupportedAuthTypeError",
    "create_content_generator",
    "create_content_generator_config",
]
