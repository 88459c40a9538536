"""Filter predicates for source queries.

A ``Filter`` is a tagged value: ``operator is None`` means equality, any
other operator qualifies the comparison. Raw user input (a bare scalar, an
``{"operator", "value"}`` mapping, or a list of either) is converted once by
``normalize_filters``; nothing downstream inspects shapes again.
"""

from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, model_validator

FilterValue = Union[bool, int, float, str]


class FilterOperator(str, Enum):
    GTE = "gte"
    GT = "gt"
    LTE = "lte"
    LT = "lt"
    NE = "ne"
    IN = "in"


class Filter(BaseModel):
    """A single predicate on one record field."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    value: Union[FilterValue, List[FilterValue]]
    operator: Optional[FilterOperator] = None

    @model_validator(mode="after")
    def _check_value_shape(self) -> "Filter":
        if isinstance(self.value, list):
            if self.operator is not FilterOperator.IN:
                raise ValueError("only the 'in' operator accepts a list of values")
            if not self.value:
                raise ValueError("'in' filter needs at least one value")
        return self

    @classmethod
    def coerce(cls, raw: Any) -> "Filter":
        """Build a Filter from a Filter, an operator mapping or a bare scalar."""
        if isinstance(raw, Filter):
            return raw
        if isinstance(raw, Mapping):
            return cls.model_validate(dict(raw))
        return cls(value=raw)

    def param_name(self, field: str) -> str:
        if self.operator is None:
            return f"filter_{field}"
        return f"filter_{field}_{self.operator.value}"

    def render_value(self) -> str:
        if isinstance(self.value, list):
            return ",".join(_render_scalar(v) for v in self.value)
        return _render_scalar(self.value)


def _render_scalar(value: FilterValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _render_float(value)
    return str(value)


def _render_float(value: float) -> str:
    """Plain decimal text: integral floats drop ".0", no exponent notation."""
    if value.is_integer():
        return str(int(value))
    text = repr(value)
    if "e" in text:
        text = format(Decimal(text), "f")
    return text


def normalize_filters(raw: Optional[Mapping[str, Any]]) -> Dict[str, List[Filter]]:
    """
    Normalize a filters mapping to ``{field: [Filter, ...]}``.

    A list under a field means several predicates that must all hold; the
    list-of-values case belongs to the ``in`` operator's ``value`` instead.
    """
    if not raw:
        return {}
    if not isinstance(raw, Mapping):
        raise ValueError("filters must be a mapping of field name to filter(s)")
    normalized: Dict[str, List[Filter]] = {}
    for field, filter_or_filters in raw.items():
        predicates = filter_or_filters if isinstance(filter_or_filters, (list, tuple)) else [filter_or_filters]
        normalized[str(field)] = [Filter.coerce(p) for p in predicates]
    return normalized


def eq(value: FilterValue) -> Filter:
    return Filter(value=value)


def gte(value: FilterValue) -> Filter:
    return Filter(operator=FilterOperator.GTE, value=value)


def gt(value: FilterValue) -> Filter:
    return Filter(operator=FilterOperator.GT, value=value)


def lte(value: FilterValue) -> Filter:
    return Filter(operator=FilterOperator.LTE, value=value)


def lt(value: FilterValue) -> Filter:
    return Filter(operator=FilterOperator.LT, value=value)


def ne(value: FilterValue) -> Filter:
    return Filter(operator=FilterOperator.NE, value=value)


def in_(*values: FilterValue) -> Filter:
    """``in`` predicate; a single value is sent as-is, several are comma-joined."""
    if len(values) == 1:
        return Filter(operator=FilterOperator.IN, value=values[0])
    return Filter(operator=FilterOperator.IN, value=list(values))
