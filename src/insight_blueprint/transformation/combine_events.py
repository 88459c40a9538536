"""Merge event pages from several sources or chains into one timeline."""

from typing import List

from ..source.base import SourceResponse
from ..source.events import Event
from .base import Transformation


class CombineEventsTransformation(Transformation[List[SourceResponse[Event]], List[Event]]):
    """Flatten event pages and order them newest first by block timestamp.

    Ties keep their input order. Events without a timestamp sort last.
    """

    def transform(self, data: List[SourceResponse[Event]]) -> List[Event]:
        events = [event for response in data for event in response.data]
        return sorted(
            events,
            key=lambda event: (event.block_timestamp is not None, event.block_timestamp or 0),
            reverse=True,
        )
