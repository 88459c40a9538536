"""Typed access to on-chain events and transactions served by the Insight API."""

from .config.loader import InsightConfig, load_client_config
from .source import Source

__all__ = ["InsightConfig", "Source", "load_client_config"]
