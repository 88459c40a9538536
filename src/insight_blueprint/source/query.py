"""Query option models shared by every source."""

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .filters import Filter, normalize_filters


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


def _as_list(value: Union[str, List[str]]) -> List[str]:
    return [value] if isinstance(value, str) else list(value)


def _check_names(value: Union[str, List[str]], what: str) -> Union[str, List[str]]:
    names = _as_list(value)
    if not names:
        raise ValueError(f"{what} needs at least one entry")
    if any(not name for name in names):
        raise ValueError(f"{what} entries must be non-empty strings")
    return value


class OrderBy(BaseModel):
    """Sort key; several fields form a composite key evaluated left to right."""

    model_config = ConfigDict(extra="forbid")

    field: Union[str, List[str]]
    direction: Optional[SortDirection] = None

    @field_validator("field")
    @classmethod
    def _field_not_empty(cls, value):
        return _check_names(value, "order_by.field")

    @property
    def fields(self) -> List[str]:
        return _as_list(self.field)


class Pagination(BaseModel):
    model_config = ConfigDict(extra="forbid")

    page: Optional[int] = Field(default=None, ge=0)
    limit: Optional[int] = Field(default=None, ge=0)


class QueryOptions(BaseModel):
    """Filters, ordering and pagination for a plain query.

    ``filters`` accepts the loose input forms understood by
    ``normalize_filters`` and always holds ``{field: [Filter, ...]}``
    afterwards.
    """

    model_config = ConfigDict(extra="forbid")

    filters: Dict[str, List[Filter]] = Field(default_factory=dict)
    order_by: Optional[OrderBy] = None
    pagination: Optional[Pagination] = None

    @field_validator("filters", mode="before")
    @classmethod
    def _normalize_filters(cls, value: Any) -> Dict[str, List[Filter]]:
        return normalize_filters(value)


class AggregationQueryOptions(QueryOptions):
    """Query options plus grouping and aggregation expressions.

    Aggregation expressions (``count()``, ``sum(value)``...) are passed to the
    remote service verbatim.
    """

    group_by: Optional[Union[str, List[str]]] = None
    aggregation: Union[str, List[str]]

    @field_validator("group_by")
    @classmethod
    def _group_by_not_empty(cls, value):
        if value is None:
            return value
        return _check_names(value, "group_by")

    @field_validator("aggregation")
    @classmethod
    def _aggregation_not_empty(cls, value):
        return _check_names(value, "aggregation")

    @property
    def group_by_fields(self) -> List[str]:
        return [] if self.group_by is None else _as_list(self.group_by)

    @property
    def aggregations(self) -> List[str]:
        return _as_list(self.aggregation)
