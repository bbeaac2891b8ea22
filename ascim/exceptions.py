"""Errors raised at the ascim boundary."""


class AscimError(Exception):
    """Base class for all ascim errors."""


class DecodeFailure(AscimError):
    """The image could not be opened or decoded."""

    def __init__(self, path, reason):
        self.path = str(path)
        self.reason = str(reason)
        super().__init__(f"Failed to load image {self.path}: {self.reason}")


class InvalidDimensions(AscimError, ValueError):
    """A width, height or ratio that cannot produce a character grid."""
