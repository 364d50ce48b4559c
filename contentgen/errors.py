"""Exceptions raised by content generators."""


class ContentGeneratorError(Exception):
    """Base class for content generation failures."""


class UnsupportedAuthTypeError(ContentGeneratorError, ValueError):
    """Raised when no backend can be built for the configured auth type."""

    def __init__(self, auth_type, reason: str = ""):
        self.auth_type = auth_type
        value = getattr(auth_type, "value", auth_type)
        message = f"Error creating contentGenerator: Unsupported authType: {value}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class ProviderHTTPError(ContentGeneratorError):
    """Non-success HTTP status returned by an OpenAI-compatible backend.

    Carries the status code and raw body so callers can decide whether to
    retry; nothing here classifies the failure further.
    """

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"OpenAI-compatible error {status_code}: {body}")
