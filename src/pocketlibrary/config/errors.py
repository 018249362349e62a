"""Errors raised while reading pocketlibrary settings."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Raised when an environment value cannot be turned into a usable setting."""


class MissingConfigurationError(ConfigurationError):
    """Raised when a required setting (e.g. the mirror URL) is absent or blank."""
