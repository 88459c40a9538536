"""Tests for event transformations."""

from insight_blueprint.source.base import SourceMeta, SourceResponse
from insight_blueprint.source.events import Event
from insight_blueprint.transformation import CombineEventsTransformation


def _page(chain_id, *timestamps):
    return SourceResponse[Event](
        meta=SourceMeta(chain_id=chain_id),
        data=[Event(chain_id=chain_id, block_timestamp=ts, log_index=i) for i, ts in enumerate(timestamps)],
    )


def test_combines_pages_newest_first():
    events = CombineEventsTransformation().transform([_page(1, 100, 300), _page(137, 200)])
    assert [e.block_timestamp for e in events] == [300, 200, 100]
    assert [e.chain_id for e in events] == [1, 137, 1]


def test_ties_keep_input_order():
    events = CombineEventsTransformation().transform([_page(1, 100), _page(137, 100)])
    assert [e.chain_id for e in events] == [1, 137]


def test_empty_input():
    assert CombineEventsTransformation().transform([]) == []
