"""Exceptions raised while building compose commands."""


class ComposeError(Exception):
    """Base class for flow-compose errors."""


class ConfigurationError(ComposeError):
    """A required identifier or input is missing or malformed.

    Raised before any argument is emitted; the command must not be executed.
    """
