"""Search request model — everything the transport needs for one call."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from fluentsearch.query.types import SearchType


class SearchRequest(BaseModel):
    """An assembled request handed to a ``SearchTransport``.

    The body holds the query document only; pagination, scrolling and the
    search type travel as request parameters.
    """

    index: str | None = Field(default=None, description="Target index; None searches all indices")
    doc_type: str | None = Field(default=None, description="Deprecated mapping type")
    id: str | None = Field(default=None, description="Single-document lookup id")
    body: dict[str, Any] = Field(default_factory=dict, description="Assembled request document")
    size: int = Field(default=10, ge=0, description="Number of hits to return")
    from_: int = Field(default=0, ge=0, description="Starting hit offset")
    scroll: str | None = Field(default=None, description="Scroll keep-alive")
    scroll_id: str | None = Field(default=None, description="Scroll cursor to continue")
    search_type: SearchType | None = Field(default=None)
    ignore: list[int] = Field(default_factory=list, description="Status codes treated as empty results")

    def params(self) -> dict[str, Any]:
        """Request parameters in client keyword form, omitting unset values."""
        params: dict[str, Any] = {"size": self.size, "from_": self.from_}
        if self.scroll:
            params["scroll"] = self.scroll
        if self.search_type is not None:
            params["search_type"] = self.search_type.value
        if self.ignore:
            params["ignore"] = list(self.ignore)
        return params
