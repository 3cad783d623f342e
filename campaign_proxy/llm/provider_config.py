"""Environment-driven configuration for the proxy.

Architectural role:
    Builds the single immutable `ProxyConfig` used by the entrypoint, the HTTP
    application factory, and the Gemini client. Nothing reads the environment
    after startup.

Determinism:
    Deterministic for a fixed process environment (plus `.env`, loaded once by
    `load_dotenv()` at import time).

Failure behavior:
    Missing or invalid required values raise `ConfigurationError`. The
    entrypoint treats that as fatal and exits before binding a listener.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from campaign_proxy.core.errors import ConfigurationError

load_dotenv()

DEFAULT_MODEL_NAME = "gemini-2.5-flash"
DEFAULT_PORT = 3000
DEFAULT_HOST = "0.0.0.0"
DEFAULT_TIMEOUT = 120.0

GEMINI_URL_TEMPLATE = (
    "https://generativelanguage.googleapis.com/v1beta/models/"
    "{model}:generateContent"
)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class ProxyConfig:
    """Immutable runtime configuration.

    Attributes:
        api_key: Gemini API key, sent as `x-goog-api-key`.
        frontend_origin: The only origin granted CORS access. `None` means
            cross-origin access is unrestricted.
        model_name: Gemini model id used for every call.
        host: Listen address.
        port: Listen port.
        request_timeout: Per-call HTTP timeout in seconds.
        debug: Enables debug logging of prompts and upstream text.
    """

    api_key: str
    frontend_origin: Optional[str] = None
    model_name: str = DEFAULT_MODEL_NAME
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    request_timeout: float = DEFAULT_TIMEOUT
    debug: bool = False

    @property
    def generate_url(self) -> str:
        return GEMINI_URL_TEMPLATE.format(model=self.model_name)

    def __repr__(self) -> str:
        # Keep the key out of logs and tracebacks.
        return (
            f"ProxyConfig(frontend_origin={self.frontend_origin!r}, "
            f"model_name={self.model_name!r}, host={self.host!r}, port={self.port}, "
            f"request_timeout={self.request_timeout}, debug={self.debug})"
        )


def _parse_bool(name: str, raw: Optional[str], default: bool) -> bool:
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {raw!r}.")


def _parse_port(raw: Optional[str]) -> int:
    if raw is None or not raw.strip():
        return DEFAULT_PORT
    try:
        port = int(raw)
    except ValueError:
        raise ConfigurationError(f"PORT must be an integer, got {raw!r}.") from None
    if not 0 < port < 65536:
        raise ConfigurationError(f"PORT must be between 1 and 65535, got {port}.")
    return port


def _parse_timeout(raw: Optional[str]) -> float:
    if raw is None or not raw.strip():
        return DEFAULT_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError:
        raise ConfigurationError(f"GEMINI_TIMEOUT must be a number, got {raw!r}.") from None
    if timeout <= 0:
        raise ConfigurationError("GEMINI_TIMEOUT must be positive.")
    return timeout


def load_config(environ: Optional[Mapping[str, str]] = None) -> ProxyConfig:
    """Build `ProxyConfig` from environment variables.

    Args:
        environ: Mapping to read from. Defaults to `os.environ`.

    Returns:
        Fully validated configuration.

    Raises:
        ConfigurationError: `GEMINI_API_KEY` is missing, `FRONTEND_ORIGIN` is
            missing while `REQUIRE_FRONTEND_ORIGIN` is on, or a numeric/boolean
            value cannot be parsed.
    """
    env = os.environ if environ is None else environ

    api_key = (env.get("GEMINI_API_KEY") or "").strip()
    if not api_key:
        raise ConfigurationError("GEMINI_API_KEY environment variable is not set.")

    require_origin = _parse_bool(
        "REQUIRE_FRONTEND_ORIGIN", env.get("REQUIRE_FRONTEND_ORIGIN"), True
    )
    frontend_origin = (env.get("FRONTEND_ORIGIN") or "").strip() or None
    if require_origin and frontend_origin is None:
        raise ConfigurationError("FRONTEND_ORIGIN environment variable is not set.")

    return ProxyConfig(
        api_key=api_key,
        frontend_origin=frontend_origin,
        model_name=(env.get("MODEL_NAME") or "").strip() or DEFAULT_MODEL_NAME,
        host=(env.get("HOST") or "").strip() or DEFAULT_HOST,
        port=_parse_port(env.get("PORT")),
        request_timeout=_parse_timeout(env.get("GEMINI_TIMEOUT")),
        debug=_parse_bool("DEBUG", env.get("DEBUG"), False),
    )
