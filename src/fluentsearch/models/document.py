"""Document model — a search hit hydrated into a typed object.

The default hydrator for query results. Applications with their own model
classes pass a different hydrator to ``Query``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class Document(BaseModel):
    """A single hit returned by the search engine."""

    id: str = Field(description="Document identifier (``_id``)")
    index: str | None = Field(default=None, description="Index the document was read from")
    score: float | None = Field(default=None, description="Relevance score, None when sorted without scoring")
    source: dict[str, Any] = Field(default_factory=dict, description="Stored document fields")
    highlight: dict[str, list[str]] = Field(default_factory=dict, description="Highlighted fragments per field")
    sort: list[Any] | None = Field(default=None, description="Sort values of the hit")

    @classmethod
    def from_hit(cls, hit: dict[str, Any]) -> Document:
        """Build a ``Document`` from a raw hit (search hit or get response)."""
        return cls(
            id=str(hit.get("_id", "")),
            index=hit.get("_index"),
            score=hit.get("_score"),
            source=hit.get("_source") or {},
            highlight=hit.get("highlight") or {},
            sort=hit.get("sort"),
        )

    def __getitem__(self, key: str) -> Any:
        return self.source[key]

    def get(self, key: str, default: Any = None) -> Any:
        return self.source.get(key, default)
