"""Exceptions raised on precondition violations."""


class ConfigurationError(ValueError):
    """Board size, mine count and safe zone cannot be satisfied together."""


class InvalidArgumentError(ValueError):
    """A safe zone or coordinate passed by the caller is empty or malformed."""
