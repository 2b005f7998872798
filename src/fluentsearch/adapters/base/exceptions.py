"""Transport-specific exceptions."""


class TransportError(Exception):
    """Base exception for transport errors."""


class ConnectionError(TransportError):
    """Raised when the transport cannot connect to the search cluster."""


class QueryError(TransportError):
    """Raised when a search, scroll or count request fails."""


class IndexAdminError(TransportError):
    """Raised when an index administration request fails."""


class ConfigurationError(TransportError):
    """Raised when transport configuration is invalid."""
