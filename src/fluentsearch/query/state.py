"""Query state — the clause accumulator owned by a single builder."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

from fluentsearch.query.types import SOURCE_EXCLUDES, SOURCE_INCLUDES, SearchType

Bucket = Literal["must", "must_not", "filter"]


class SourceProjection(BaseModel):
    """Fields to include in or exclude from returned documents.

    A field never appears in both lists: the latest ``select``/``unselect``
    call removes it from the opposite list.
    """

    include: list[str] = Field(default_factory=list)
    exclude: list[str] = Field(default_factory=list)

    def add_include(self, fields: list[str]) -> None:
        self.include = merge_unique(self.include, fields)
        self.exclude = [f for f in self.exclude if f not in self.include]

    def add_exclude(self, fields: list[str]) -> None:
        self.exclude = merge_unique(self.exclude, fields)
        self.include = [f for f in self.include if f not in self.exclude]

    def to_source(self) -> dict[str, list[str]]:
        return {SOURCE_INCLUDES: list(self.include), SOURCE_EXCLUDES: list(self.exclude)}


class QueryState(BaseModel):
    """Mutable state accumulated by fluent builder calls.

    Owned by exactly one builder; never share an instance between
    concurrent queries.
    """

    index: str | None = Field(default=None, description="Target index name")
    doc_type: str | None = Field(default=None, description="Deprecated mapping type")
    id: str | None = Field(default=None, description="Single-document identifier filter")

    must: list[dict[str, Any]] = Field(default_factory=list)
    must_not: list[dict[str, Any]] = Field(default_factory=list)
    filter: list[dict[str, Any]] = Field(default_factory=list)

    sort: list[dict[str, str]] = Field(default_factory=list, description="Ordered (field -> direction) pairs")
    source: SourceProjection | None = Field(default=None, description="Returned field projection")

    size: int = Field(default=10, ge=0)
    from_: int = Field(default=0, ge=0)

    scroll: str | None = Field(default=None, description="Scroll keep-alive duration, e.g. '5m'")
    scroll_id: str | None = Field(default=None)
    search_type: SearchType | None = Field(default=None)
    ignores: list[int] = Field(default_factory=list, description="Status codes treated as empty results")

    body: dict[str, Any] = Field(default_factory=dict, description="Raw body override")

    def add(self, bucket: Bucket, clause: dict[str, Any]) -> None:
        """Append ``clause`` to one of the three bool buckets."""
        getattr(self, bucket).append(clause)

    def projection(self) -> SourceProjection:
        if self.source is None:
            self.source = SourceProjection()
        return self.source

    @property
    def has_clauses(self) -> bool:
        return bool(self.must or self.must_not or self.filter)


def merge_unique(existing: list[Any], new: list[Any]) -> list[Any]:
    merged = list(existing)
    for item in new:
        if item not in merged:
            merged.append(item)
    return merged
