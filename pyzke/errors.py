# pyzke/errors.py


class PyzkeError(Exception):
    """Base class for every error raised by the composition engine."""


class ResourceNotFound(PyzkeError, FileNotFoundError):
    """A script or stylesheet declared by a widget class could not be read."""

    def __init__(self, path):
        super().__init__(f"Included file not found: {path}")
        self.path = path


class ConfigurationError(PyzkeError, ValueError):
    """
    Raised for registration mistakes: a broken or cyclic superclass chain,
    a class registered twice with different metadata, or a malformed
    definition document.
    """
