"""Exception hierarchy for the proxy.

Architectural role:
    Defines the only error kinds the HTTP layer knows how to render.

Mapping to transport:
    - `ValidationError` -> HTTP 400 with a descriptive message.
    - `UpstreamError` -> HTTP 500 with a generic per-endpoint message.
    - `ConfigurationError` -> fatal at startup, never reaches a handler.
"""


class ProxyError(Exception):
    """Base class for proxy errors."""


class ValidationError(ProxyError):
    """A required request field is missing or malformed."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UpstreamError(ProxyError):
    """Calling or parsing the external model service failed.

    Attributes:
        context: Endpoint tag used in the client-visible message and logs.
        reason: Server-side failure detail. Never sent to the client.
    """

    def __init__(self, context: str, reason: str = ""):
        super().__init__(f"Error in {context}: {reason}" if reason else f"Error in {context}")
        self.context = context
        self.reason = reason

    @property
    def public_message(self) -> str:
        return f"An error occurred in {self.context}."


class ConfigurationError(ProxyError):
    """Required startup configuration is missing or invalid."""
