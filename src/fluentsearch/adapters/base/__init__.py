"""Base transport interface — Abstract classes for search cluster connectors."""

from fluentsearch.adapters.base.adapter import RawResults, SearchTransport, TransportHealth
from fluentsearch.adapters.base.registry import TransportNotFoundError, TransportRegistry

__all__ = ["RawResults", "SearchTransport", "TransportHealth", "TransportNotFoundError", "TransportRegistry"]
