"""Data sources over the Insight API.

``Source`` is the public entry point; the source classes and models are
exported for typing and for building queries.
"""

from .base import DataSource, SourceAggregatedResponse, SourceMeta, SourceResponse
from .encoder import encode_query_params, to_query_pairs
from .errors import QueryValidationError, SourceError, SourceParseError, SourceTransportError
from .events import Event, EventFields, EventsSource
from .facade import Source
from .filters import Filter, FilterOperator
from .query import AggregationQueryOptions, OrderBy, Pagination, QueryOptions, SortDirection
from .transactions import Transaction, TransactionsSource

__all__ = [
    "AggregationQueryOptions",
    "DataSource",
    "Event",
    "EventFields",
    "EventsSource",
    "Filter",
    "FilterOperator",
    "OrderBy",
    "Pagination",
    "QueryOptions",
    "QueryValidationError",
    "SortDirection",
    "Source",
    "SourceAggregatedResponse",
    "SourceError",
    "SourceMeta",
    "SourceParseError",
    "SourceResponse",
    "SourceTransportError",
    "Transaction",
    "TransactionsSource",
    "encode_query_params",
    "to_query_pairs",
]
