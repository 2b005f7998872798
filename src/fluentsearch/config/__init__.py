"""Configuration models."""

from fluentsearch.config.settings import ConnectionConfig, ObservabilitySettings, QuerySettings, Settings

__all__ = ["ConnectionConfig", "ObservabilitySettings", "QuerySettings", "Settings"]
