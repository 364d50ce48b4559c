"""Content generator implementations."""
from contentgen.providers.base import ContentGenerator
from contentgen.providers.registry import BackendRegistry

__all__ = ["BackendRegistry", "ContentGenerator"]
