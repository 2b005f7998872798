"""Tests for the free-text search compiler."""

from __future__ import annotations

from fluentsearch.query.builder import FluentQueryBuilder
from fluentsearch.query.search import Search, Token, tokenize


class TestTokenize:
    def test_words_and_phrases(self) -> None:
        tokens = list(tokenize('solar "deep learning"  nowcasting'))
        assert tokens == [
            Token("solar"),
            Token("deep learning", phrase=True),
            Token("nowcasting"),
        ]

    def test_field_and_negation(self) -> None:
        tokens = list(tokenize('title:solar -wind -author:"Jane Doe"'))
        assert tokens == [
            Token("solar", field="title"),
            Token("wind", negated=True),
            Token("Jane Doe", field="author", phrase=True, negated=True),
        ]

    def test_unterminated_quote_is_a_word(self) -> None:
        assert list(tokenize('"solar')) == [Token("solar")]

    def test_empty_phrase_and_lone_dash_are_skipped(self) -> None:
        assert list(tokenize('"" - solar')) == [Token("solar")]


class TestSearch:
    def test_bare_terms_become_multi_match_in_must(self, builder: FluentQueryBuilder) -> None:
        builder.search("solar power")
        assert builder.state.must == [
            {"multi_match": {"query": "solar"}},
            {"multi_match": {"query": "power"}},
        ]

    def test_negated_terms_go_to_must_not(self, builder: FluentQueryBuilder) -> None:
        builder.search('solar -title:"wind farm"')
        assert builder.state.must == [{"multi_match": {"query": "solar"}}]
        assert builder.state.must_not == [{"match_phrase": {"title": "wind farm"}}]

    def test_boost_is_attached(self, builder: FluentQueryBuilder) -> None:
        builder.search('title:solar "deep learning"', boost=2)
        assert builder.state.must == [
            {"match": {"title": {"query": "solar", "boost": 2}}},
            {"multi_match": {"query": "deep learning", "type": "phrase", "boost": 2}},
        ]

    def test_settings_callback_configures_fields(self, builder: FluentQueryBuilder) -> None:
        seen: list[Search] = []

        def settings(search: Search) -> None:
            seen.append(search)
            search.fields("title^2", "content")

        builder.search("solar", settings)
        assert len(seen) == 1
        assert builder.state.must == [{"multi_match": {"query": "solar", "fields": ["title^2", "content"]}}]

    def test_search_augments_existing_clauses(self, builder: FluentQueryBuilder) -> None:
        body = builder.where("title", "like", "energy").where("year", 2024).search("solar").to_body()
        assert body["query"]["bool"]["must"] == [
            {"match": {"title": "energy"}},
            {"multi_match": {"query": "solar"}},
        ]
        assert body["query"]["bool"]["filter"] == [{"term": {"year": 2024}}]
