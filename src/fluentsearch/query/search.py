"""Free-text search compiler.

Parses a small query-string syntax into match clauses on the builder
that invoked it:

- ``solar power``        bare words, matched across the configured fields
- ``"solar power"``      quoted phrase, matched as a phrase
- ``title:solar``        field-scoped match
- ``title:"solar power"`` field-scoped phrase
- ``-wind`` / ``-title:wind`` negation, routed to ``must_not``

Clauses are added to the same bool query the builder is accumulating.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from fluentsearch.query import predicates

if TYPE_CHECKING:
    from fluentsearch.query.builder import FluentQueryBuilder

logger = logging.getLogger(__name__)

_TOKEN = re.compile(
    r"""
    (?P<negate>-)?
    (?:(?P<field>[\w.@*]+):)?
    (?:"(?P<phrase>[^"]*)"|(?P<word>\S+))
    """,
    re.VERBOSE,
)


@dataclass(frozen=True)
class Token:
    """A single parsed query-string term."""

    value: str
    field: str | None = None
    phrase: bool = False
    negated: bool = False


def tokenize(query_string: str) -> Iterator[Token]:
    """Split ``query_string`` on whitespace, keeping quoted phrases whole.

    An unterminated quote is treated as a plain word with the quote removed.
    Empty phrases and lone dashes are skipped.
    """
    for m in _TOKEN.finditer(query_string):
        phrase = m.group("phrase")
        if phrase is not None:
            value, is_phrase = phrase.strip(), True
        else:
            value, is_phrase = m.group("word").strip('"'), False

        if not value or value == "-":
            continue

        yield Token(
            value=value,
            field=m.group("field"),
            phrase=is_phrase,
            negated=m.group("negate") is not None,
        )


class Search:
    """Compiles a query string into ``must``/``must_not`` clauses.

    Args:
        builder: The builder whose state receives the clauses.
        query_string: Raw user query.
        settings: Optional callback receiving this ``Search`` before
            compilation, e.g. ``lambda s: s.fields("title^2", "content")``.
    """

    def __init__(
        self,
        builder: FluentQueryBuilder,
        query_string: str,
        settings: Callable[[Search], None] | None = None,
    ) -> None:
        self.builder = builder
        self.query_string = query_string
        self.settings = settings
        self._fields: list[str] = []
        self._boost: float | None = None

    def fields(self, *fields: str) -> Search:
        """Restrict bare terms to these fields (``"field^boost"`` allowed)."""
        self._fields = list(fields)
        return self

    def boost(self, boost: float | None) -> Search:
        self._boost = boost
        return self

    def build(self) -> None:
        """Parse the query string and add the resulting clauses to the builder."""
        if self.settings is not None:
            self.settings(self)

        state = self.builder.state
        count = 0
        for token in tokenize(self.query_string):
            state.add("must_not" if token.negated else "must", self._compile(token))
            count += 1

        logger.debug("Compiled search %r into %d clause(s)", self.query_string, count)

    def _compile(self, token: Token) -> predicates.Clause:
        if token.field is not None:
            if token.phrase:
                return predicates.match_phrase(token.field, token.value, boost=self._boost)
            return predicates.match(token.field, token.value, boost=self._boost)
        return predicates.multi_match(token.value, self._fields, phrase=token.phrase, boost=self._boost)
