"""Search result model — hydrated hits plus response metadata."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class SearchResult(BaseModel, Generic[T]):
    """Hydrated result of a search or scroll call.

    Iterating yields the hydrated hits in response order.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    hits: list[T] = Field(default_factory=list, description="Hydrated hits")
    total: int = Field(default=0, description="Total number of matching documents")
    max_score: float | None = Field(default=None)
    scroll_id: str | None = Field(default=None, description="Cursor for the next scroll page")
    took_ms: int = Field(default=0, description="Engine-reported execution time in ms")
    aggregations: dict[str, Any] = Field(default_factory=dict)

    def __iter__(self) -> Iterator[T]:  # type: ignore[override]
        return iter(self.hits)

    def __len__(self) -> int:
        return len(self.hits)

    def first(self) -> T | None:
        return self.hits[0] if self.hits else None
