"""Application settings — Pydantic-based configuration with YAML and env var support.

Configuration is loaded from (in order of precedence):
  1. Environment variables (FLUENTSEARCH_ prefix)
  2. YAML config file (if specified)
  3. Default values
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings


class QuerySettings(BaseModel):
    """Defaults injected into every query builder.

    Frozen so a single instance can be shared by all builders of a process.
    """

    model_config = ConfigDict(frozen=True)

    default_limit: int = Field(default=10, ge=0, description="Number of hits returned when take() is not called")
    default_offset: int = Field(default=0, ge=0, description="Starting offset when skip() is not called")
    default_scroll: str = Field(default="5m", description="Scroll keep-alive used by scroll() without arguments")


class ConnectionConfig(BaseModel):
    """Configuration for a single search cluster connection."""

    driver: str = Field(default="opensearch", description="Registered transport name")
    hosts: list[str] = Field(default_factory=list, description="Cluster node URLs")
    username: str | None = Field(default=None, description="HTTP basic-auth username")
    password: str | None = Field(default=None, description="HTTP basic-auth password")
    api_key: str | None = Field(default=None, description="API key authentication")
    verify_certs: bool = Field(default=True, description="Whether to verify TLS certificates")
    extra: dict[str, Any] = Field(default_factory=dict, description="Transport-specific client options")

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
            # Single host as plain string
            return [v] if v else []
        return list(v)


class ObservabilitySettings(BaseModel):
    """Observability configuration."""

    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="json", description="Log format: json, console")


class Settings(BaseSettings):
    """Root application settings.

    Configuration is loaded from environment variables with the FLUENTSEARCH_ prefix.
    Nested settings use double underscores: FLUENTSEARCH_QUERY__DEFAULT_LIMIT=25

    Example:
        FLUENTSEARCH_DEFAULT_CONNECTION=default
        FLUENTSEARCH_CONNECTIONS__DEFAULT__HOSTS='["https://localhost:9200"]'
        FLUENTSEARCH_OBSERVABILITY__LOG_FORMAT=console
    """

    model_config = {
        "env_prefix": "FLUENTSEARCH_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    query: QuerySettings = Field(default_factory=QuerySettings)
    default_connection: str = Field(default="default", description="Connection used when none is named")
    connections: dict[str, ConnectionConfig] = Field(
        default_factory=lambda: {"default": ConnectionConfig(hosts=["https://localhost:9200"])},
        description="Named cluster connections",
    )
    indices: dict[str, dict[str, Any]] = Field(
        default_factory=dict,
        description="Index definitions (settings, mappings, aliases) keyed by index name",
    )
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
