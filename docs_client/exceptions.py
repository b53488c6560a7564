class DocsError(Exception):
    """Base class for every error raised by the Docs client."""


class MissingRequiredFieldError(DocsError):
    """A required field was left out; raised before any request is sent."""


class ResourceConflictError(DocsError):
    """The API refused to create a resource that already exists (HTTP 422)."""


class InvalidArgumentError(DocsError, TypeError):
    """A lookup received a query of an unsupported type."""


class TransportError(DocsError):
    """The request never produced an HTTP response (connection, timeout, ...)."""
