"""Tests for request body assembly."""

from __future__ import annotations

import json

from fluentsearch.query.builder import FluentQueryBuilder


class TestQueryKey:
    def test_empty_builder_has_no_query_key(self, builder: FluentQueryBuilder) -> None:
        assert builder.to_body() == {}

    def test_only_non_empty_buckets_are_emitted(self, builder: FluentQueryBuilder) -> None:
        body = builder.where("a", 1).to_body()
        assert body == {"query": {"bool": {"filter": [{"term": {"a": 1}}]}}}

    def test_empty_raw_query_is_removed(self, builder: FluentQueryBuilder) -> None:
        assert builder.body({"query": {}, "min_score": 2}).to_body() == {"min_score": 2}

    def test_clauses_merge_into_raw_query(self, builder: FluentQueryBuilder) -> None:
        body = builder.nested("comments").where("a", 1).to_body()
        assert body["query"] == {"nested": {"path": "comments"}, "bool": {"filter": [{"term": {"a": 1}}]}}

    def test_all_three_buckets(self, builder: FluentQueryBuilder) -> None:
        body = builder.where("title", "like", "solar").where_not("status", "draft").where("views", ">", 10).to_body()
        assert body["query"]["bool"] == {
            "must": [{"match": {"title": "solar"}}],
            "must_not": [{"term": {"status": "draft"}}],
            "filter": [{"range": {"views": {"gt": 10}}}],
        }


class TestScenario:
    def test_chained_filters_sort_and_pagination(self, builder: FluentQueryBuilder) -> None:
        body = builder.where("age", ">", 18).where("status", "active").order_by("name").take(5).skip(10).to_body()

        assert body == {
            "query": {"bool": {"filter": [{"range": {"age": {"gt": 18}}}, {"term": {"status": "active"}}]}},
            "sort": [{"name": "asc"}],
        }
        assert builder.state.size == 5
        assert builder.state.from_ == 10

    def test_id_equality_adds_no_term_filter(self, builder: FluentQueryBuilder) -> None:
        body = builder.where("_id", "=", "abc").to_body()
        assert "query" not in body
        assert builder.state.id == "abc"


class TestSource:
    def test_projection_emitted(self, builder: FluentQueryBuilder) -> None:
        body = builder.select("a", "b").unselect("a").to_body()
        assert body["_source"] == {"includes": ["b"], "excludes": ["a"]}

    def test_builder_projection_wins_over_raw_body(self, builder: FluentQueryBuilder) -> None:
        builder.body({"_source": {"includes": ["x"], "excludes": ["y"], "extra": True}})
        body = builder.select("a").to_body()
        assert body["_source"] == {"includes": ["a"], "excludes": [], "extra": True}

    def test_raw_list_source_is_treated_as_includes(self, builder: FluentQueryBuilder) -> None:
        builder.body({"_source": ["x"]})
        body = builder.unselect("y").to_body()
        assert body["_source"] == {"includes": [], "excludes": ["y"]}

    def test_raw_source_untouched_without_projection(self, builder: FluentQueryBuilder) -> None:
        assert builder.body({"_source": False}).to_body() == {"_source": False}


class TestSort:
    def test_identical_pairs_are_deduplicated(self, builder: FluentQueryBuilder) -> None:
        body = builder.order_by("x", "asc").order_by("x", "asc").to_body()
        assert body["sort"] == [{"x": "asc"}]

    def test_same_field_different_direction_is_kept(self, builder: FluentQueryBuilder) -> None:
        body = builder.order_by("x").order_by("x", "desc").to_body()
        assert body["sort"] == [{"x": "asc"}, {"x": "desc"}]

    def test_raw_sort_comes_first(self, builder: FluentQueryBuilder) -> None:
        builder.body({"sort": [{"date": "desc"}, {"x": "asc"}]})
        body = builder.order_by("x").order_by("y").to_body()
        assert body["sort"] == [{"date": "desc"}, {"x": "asc"}, {"y": "asc"}]

    def test_raw_scalar_sort_is_wrapped(self, builder: FluentQueryBuilder) -> None:
        builder.body({"sort": "_doc"})
        assert builder.order_by("x").to_body()["sort"] == ["_doc", {"x": "asc"}]


class TestIdempotence:
    def test_assembling_twice_is_identical(self, builder: FluentQueryBuilder) -> None:
        builder.body({"sort": [{"date": "desc"}], "_source": {"excludes": ["secret"]}})
        builder.where("a", 1).where_not("b", 2).search("solar").select("title").order_by("date", "desc").order_by("x")
        builder.highlight("title").group_by("author")

        first = json.dumps(builder.to_body())
        second = json.dumps(builder.to_body())
        assert first == second

    def test_empty_builder_is_idempotent(self, builder: FluentQueryBuilder) -> None:
        assert builder.to_body() == builder.to_body() == {}

    def test_reassembly_picks_up_new_clauses(self, builder: FluentQueryBuilder) -> None:
        builder.where("a", 1).to_body()
        body = builder.where("b", 2).to_body()
        assert body["query"]["bool"]["filter"] == [{"term": {"a": 1}}, {"term": {"b": 2}}]

    def test_returned_document_is_a_copy(self, builder: FluentQueryBuilder) -> None:
        body = builder.where("a", 1).to_body()
        body["query"]["bool"]["filter"].append({"term": {"b": 2}})
        assert builder.to_body()["query"]["bool"]["filter"] == [{"term": {"a": 1}}]
