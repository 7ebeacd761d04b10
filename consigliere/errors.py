"""Exception types for Consigliere."""

from __future__ import annotations


class ConsigliereError(Exception):
    """Base class for errors surfaced to tool callers as text."""

    pass


class InvalidArguments(ConsigliereError):
    """Raised when a required tool argument is missing or empty."""

    pass


class UnknownAgent(ConsigliereError):
    """Raised when an agent id is not in the registry."""

    pass


class UnknownTool(ConsigliereError):
    """Raised when a tool name is not recognised."""

    pass


class BackendError(ConsigliereError):
    """Raised when the model backend call does not complete successfully."""

    def __init__(self, message: str, status_code: int | None = None, body: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ConfigurationError(Exception):
    """Raised at startup when the environment is not usable."""

    pass
