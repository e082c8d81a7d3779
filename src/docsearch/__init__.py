"""docsearch — Multi-tenant document search API over OpenSearch collections."""

__version__ = "0.1.0"
