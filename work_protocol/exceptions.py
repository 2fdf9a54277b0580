"""Exceptions raised by the work protocol generator."""


class WorkProtocolError(Exception):
    """Base class for all errors raised by this package."""


class InvalidMetadata(WorkProtocolError, ValueError):
    """User metadata is incomplete and cannot be compiled into a protocol."""


class ProviderError(WorkProtocolError, RuntimeError):
    """Repositories or commits could not be fetched from GitHub."""


class TemplateError(WorkProtocolError):
    """The document template is unreadable or fails to render."""
