"""Errors raised while reading photorecon settings from the environment."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """A setting is present but unusable, e.g. a non-numeric ``PHOTORECON_YEAR_MAX``."""


class MissingConfigurationError(ConfigurationError):
    """One or more required variables are unset or blank; all are named in the message."""
