"""Exception types raised by the prewarm layer.

Only failures that must fail the invocation are modelled here. "Nothing to do"
conditions (irrelevant event, missing cluster member, endpoint not yet
available) are returned as SKIPPED outcomes instead of raised.
"""

from __future__ import annotations

from typing import List


class PrewarmerError(Exception):
    """Base class for prewarmer failures."""


class ConfigurationError(PrewarmerError):
    """Environment variables are missing or hold invalid values.

    ``variables`` names the offending environment variables.
    """

    def __init__(self, variables: List[str], message: str = "") -> None:
        self.variables = list(variables)
        text = message or f"Missing required environment variables: {', '.join(self.variables)}"
        super().__init__(text)


class CredentialDecodeError(PrewarmerError):
    """Secret payload could not be decoded into username/password."""
