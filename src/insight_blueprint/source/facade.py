from typing import Optional

from ..config.loader import InsightConfig, load_client_config
from .events import EventsSource
from .transactions import TransactionsSource


class Source:
    """
    Entry point for all data sources.

    Example:
        source = Source()
        events = source.events.get("1", {"filters": {"address": "0x..."}})

    Without an explicit config, settings come from ``load_client_config()``.
    """

    def __init__(self, config: Optional[InsightConfig] = None):
        self.config = config or load_client_config()
        self.events = EventsSource(self.config)
        self.transactions = TransactionsSource(self.config)
