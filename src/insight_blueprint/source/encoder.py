"""Translate query options into the remote service's query-string dialect.

The result is an ordered multi-map: each parameter name maps to the list of
values sent for it, and repeated values become repeated query-string
entries. Facets that are absent from the options produce no parameters;
nothing here injects defaults.
"""

from typing import Dict, List, Optional, Tuple

from .query import AggregationQueryOptions, QueryOptions

QueryParams = Dict[str, List[str]]


def encode_query_params(options: Optional[QueryOptions]) -> QueryParams:
    """
    Encode query options into query parameters.

    Parameter order: filters (in field order), page, limit, sort_by,
    sort_order, group_by, aggregate.

    Args:
        options: Plain or aggregation query options, or None

    Returns:
        Ordered mapping of parameter name to its values
    """
    params: QueryParams = {}
    if options is None:
        return params

    for field, predicates in options.filters.items():
        for predicate in predicates:
            # Repeated predicates on one name accumulate; the service ANDs them.
            params.setdefault(predicate.param_name(field), []).append(predicate.render_value())

    if options.pagination is not None:
        if options.pagination.page is not None:
            params["page"] = [str(options.pagination.page)]
        if options.pagination.limit is not None:
            params["limit"] = [str(options.pagination.limit)]

    if options.order_by is not None:
        params["sort_by"] = list(options.order_by.fields)
        if options.order_by.direction is not None:
            params["sort_order"] = [options.order_by.direction.value]

    if isinstance(options, AggregationQueryOptions):
        if options.group_by_fields:
            params["group_by"] = options.group_by_fields
        params["aggregate"] = options.aggregations

    return params


def to_query_pairs(params: QueryParams) -> List[Tuple[str, str]]:
    """Flatten a multi-map into ``(name, value)`` pairs, preserving order."""
    return [(name, value) for name, values in params.items() for value in values]
