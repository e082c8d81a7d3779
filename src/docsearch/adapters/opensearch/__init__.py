from docsearch.adapters.opensearch.adapter import OpenSearchAdapter

__all__ = ["OpenSearchAdapter"]
