"""Environment configuration and logging setup."""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping

from consigliere.errors import ConfigurationError
from consigliere.schemas import BackendConfig, BackendMode

DEFAULT_LITELLM_BASE_URL = "http://localhost:4000"
DEFAULT_LOG_LEVEL = "INFO"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _get(environ: Mapping[str, str], key: str) -> str | None:
    """Return a stripped env value, treating blanks as unset."""
    value = environ.get(key, "").strip()
    return value or None


def load_config(environ: Mapping[str, str] | None = None) -> BackendConfig:
    """Build the backend configuration from environment variables.

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Returns:
        BackendConfig for proxy mode when USE_LITELLM is "true", else direct mode

    Raises:
        ConfigurationError: direct mode selected without GEMINI_API_KEY
    """
    if environ is None:
        environ = os.environ

    if environ.get("USE_LITELLM") == "true":
        return BackendConfig(
            mode=BackendMode.PROXY,
            api_key=_get(environ, "LITELLM_API_KEY"),
            base_url=_get(environ, "LITELLM_BASE_URL") or DEFAULT_LITELLM_BASE_URL,
        )

    api_key = _get(environ, "GEMINI_API_KEY")
    if api_key is None:
        raise ConfigurationError(
            "GEMINI_API_KEY environment variable is required when not using LiteLLM"
        )
    return BackendConfig(mode=BackendMode.DIRECT, api_key=api_key)


def get_log_level(environ: Mapping[str, str] | None = None) -> str:
    if environ is None:
        environ = os.environ
    return (_get(environ, "CONSIGLIERE_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Configure root logging on stderr; stdout carries the MCP stream."""
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )
