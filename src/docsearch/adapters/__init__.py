"""Search engine adapter layer.

Built-in adapters:
  - opensearch: OpenSearch v2+ (one index per collection, multi-index search)

Implement ``SearchAdapter`` to back collections with another engine.
"""
