from __future__ import annotations


class NearRunnerError(Exception):
    """Base class for errors raised by the runner itself (not by the near CLI)."""


class ConfigurationError(NearRunnerError):
    """Contract id or runner settings are missing, placeholders, or malformed."""
