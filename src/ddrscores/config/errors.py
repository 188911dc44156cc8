"""Errors raised while assembling settings for a run."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """A setting is present but unusable, such as a malformed roster entry."""


class MissingConfigurationError(ConfigurationError):
    """A required environment variable is unset or blank."""
