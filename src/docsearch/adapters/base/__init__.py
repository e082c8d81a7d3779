"""Base adapter interface — Abstract class for search engine connectors."""

from docsearch.adapters.base.adapter import AdapterHealth, SearchAdapter

__all__ = ["AdapterHealth", "SearchAdapter"]
