"""Backend registry for routing an auth type to the builder of its generator."""
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Dict, Optional

from contentgen.config import AuthType, ContentGeneratorConfig, RuntimeConfig
from contentgen.errors import UnsupportedAuthTypeError
from contentgen.providers.base import ContentGenerator


@dataclass(frozen=True)
class BuildContext:
    """Per-session values handed to every backend builder."""
    http_headers: Dict[str, str] = field(default_factory=dict)
    session_id: Optional[str] = None


BackendBuilder = Callable[
    [ContentGeneratorConfig, RuntimeConfig, BuildContext],
    Awaitable[ContentGenerator],
]


class BackendRegistry:
    """Maps auth types to backend builders.

    Usage:
        registry = BackendRegistry()
        registry.register(AuthType.USE_OPENAI, build_openai_compatible)
        builder = registry.get(AuthType.USE_OPENAI)
    """

    def __init__(self):
        self._builders: Dict[AuthType, BackendBuilder] = {}

    def register(self, auth_type: AuthType, builder: BackendBuilder) -> None:
        """Register a builder for an auth type, replacing any previous one."""
        self._builders[auth_type] = builder

    def get(self, auth_type: Optional[AuthType]) -> BackendBuilder:
        """Get the builder for an auth type.

        Raises:
            UnsupportedAuthTypeError: If no builder is registered for it.
        """
        builder = self._builders.get(auth_type) if auth_type is not None else None
        if builder is None:
            available = ", ".join(sorted(a.value for a in self._builders)) or "(none)"
            raise UnsupportedAuthTypeError(auth_type, f"available: {available}")
        return builder

    def __contains__(self, auth_type: AuthType) -> bool:
        return auth_type in self._builders
