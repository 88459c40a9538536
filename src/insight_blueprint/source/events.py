"""Events (contract logs) source."""

from typing import Any, List, Mapping, Optional

from .base import CHAIN_ID_FIELD, BaseSource, Record

TOPIC_SLOTS = 4
TOPIC_FIELDS = tuple(f"topic_{i}" for i in range(TOPIC_SLOTS))


class EventFields(Record):
    """Event exactly as the service stores it, one column per topic slot."""

    chain_id: Optional[int] = None
    block_number: Optional[int] = None
    block_hash: Optional[str] = None
    block_timestamp: Optional[int] = None
    transaction_hash: Optional[str] = None
    transaction_index: Optional[int] = None
    log_index: Optional[int] = None
    address: Optional[str] = None
    data: Optional[str] = None
    topic_0: Optional[str] = None
    topic_1: Optional[str] = None
    topic_2: Optional[str] = None
    topic_3: Optional[str] = None


class Event(Record):
    """Public event shape: the four topic slots collapsed into ``topics``.

    ``topics`` always keeps its slot positions; an unused slot is ``None``.
    """

    chain_id: Optional[int] = None
    block_number: Optional[int] = None
    block_hash: Optional[str] = None
    block_timestamp: Optional[int] = None
    transaction_hash: Optional[str] = None
    transaction_index: Optional[int] = None
    log_index: Optional[int] = None
    address: Optional[str] = None
    data: Optional[str] = None
    topics: List[Optional[str]] = []

    @classmethod
    def from_wire(cls, payload: Mapping[str, Any]) -> "Event":
        fields = dict(payload)
        topics = [fields.pop(name, None) for name in TOPIC_FIELDS]
        if "topics" not in fields:
            fields["topics"] = topics
        return cls.model_construct(**fields)


class EventsSource(BaseSource[Event]):
    """
    Source over the ``events`` resource.

    Use ``Source().events`` rather than constructing this directly.
    """

    path = "events"
    record_type = Event
    filter_fields = frozenset(EventFields.model_fields) - {CHAIN_ID_FIELD}
    sort_fields = filter_fields | frozenset(Event.model_fields)
