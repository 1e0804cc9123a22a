"""Exceptions raised by the map rendering pipeline."""


class ConfigurationError(ValueError):
    """Raised when a required input is missing or malformed."""
