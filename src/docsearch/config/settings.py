"""Application settings — Pydantic-based configuration with YAML and env var support.

Configuration is loaded from (in order of precedence):
  1. Environment variables (DOCSEARCH_ prefix)
  2. YAML config file (if specified)
  3. Default values
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings


class ServerSettings(BaseModel):
    """HTTP server configuration."""

    host: str = Field(default="0.0.0.0", description="Server bind address")
    port: int = Field(default=8081, description="Server port")
    cors_origins: list[str] = Field(default=["*"], description="Allowed CORS origins")


class EngineSettings(BaseModel):
    """Connection settings for the OpenSearch cluster backing every collection."""

    hosts: list[str] = Field(default_factory=lambda: ["http://localhost:9200"], description="Cluster node URLs")
    username: str | None = Field(default=None, description="HTTP basic-auth username")
    password: str | None = Field(default=None, description="HTTP basic-auth password")
    verify_certs: bool = Field(default=True, description="Verify TLS certificates")
    timeout: float = Field(default=10.0, gt=0, description="Search request timeout in seconds")
    index_namespace: str = Field(default="docsearch-documents", description="Prefix for per-collection indices")
    collections_index: str = Field(default="docsearch-collections", description="Index holding collection records")
    extra: dict[str, Any] = Field(default_factory=dict, description="Extra AsyncOpenSearch keyword arguments")

    @field_validator("hosts", mode="before")
    @classmethod
    def _parse_hosts(cls, v: Any) -> list[str]:
        """Parse hosts from JSON string (env var) or list."""
        if isinstance(v, str):
            import json

            try:
                parsed = json.loads(v)
                if isinstance(parsed, list):
                    return [str(h) for h in parsed]
            except (json.JSONDecodeError, TypeError):
                pass
            # Comma-separated or single host
            return [h.strip() for h in v.split(",") if h.strip()]
        return list(v)


class SearchSettings(BaseModel):
    """Query compilation and result shaping defaults."""

    default_language: str = Field(default="en", description="Language used when a request names none")
    default_size: int = Field(default=20, ge=1, description="Page size when a request names none")
    max_size: int = Field(default=1000, ge=1, description="Upper bound on the requested page size")
    pre_tag: str = Field(default="\ue000", description="Opening highlight marker")
    post_tag: str = Field(default="\ue001", description="Closing highlight marker")
    fragment_size: int = Field(default=75, ge=1, description="Highlight fragment size for long text fields")
    number_of_fragments: int = Field(default=3, ge=1, description="Highlight fragments per long text field")
    aggregation_size: int = Field(default=10, ge=1, description="Buckets returned per facet")
    promote_boost: float = Field(default=2.0, ge=0, description="Score boost for promoted documents")


class AdminSettings(BaseModel):
    """Credentials guarding the collection management endpoints."""

    user: str = Field(default="admin", description="Admin basic-auth user")
    password: str = Field(default="", description="Admin basic-auth password")


class ObservabilitySettings(BaseModel):
    """Observability configuration."""

    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="json", description="Log format: json, console")


class Settings(BaseSettings):
    """Root application settings.

    Configuration is loaded from environment variables with the DOCSEARCH_ prefix.
    Nested settings use double underscores: DOCSEARCH_ENGINE__HOSTS=http://os:9200

    Example:
        DOCSEARCH_SERVER__PORT=9090
        DOCSEARCH_ADMIN__PASSWORD=s3cret
        DOCSEARCH_UPDATES_ALLOWED=false
    """

    model_config = {
        "env_prefix": "DOCSEARCH_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    # Application metadata
    app_name: str = Field(default="docsearch", description="Application name, shown as the API title")

    # Read-only mode
    updates_allowed: bool = Field(default=True, description="Accept data-modifying requests")
    maintenance_message: str | None = Field(default=None, description="Message returned while read-only")

    # Component settings
    server: ServerSettings = Field(default_factory=ServerSettings)
    engine: EngineSettings = Field(default_factory=EngineSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    admin: AdminSettings = Field(default_factory=AdminSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """Load settings from a YAML configuration file.

        Values from the YAML file are used as defaults; environment variables
        still take precedence.

        Args:
            path: Path to the YAML config file.

        Returns:
            Populated Settings instance.
        """
        import yaml  # type: ignore[import-untyped]

        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)
