"""Search transport layer — Pluggable connectors for search clusters.

Built-in transports:
  - opensearch: OpenSearch v2+ via ``opensearch-py`` (Elasticsearch-compatible DSL)

Implement ``SearchTransport`` to connect another cluster client.
"""
