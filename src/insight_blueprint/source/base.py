"""Shared fetch and encoding path for every data source."""

from typing import (
    Any,
    ClassVar,
    Dict,
    FrozenSet,
    Generic,
    Iterable,
    List,
    Mapping,
    Optional,
    Protocol,
    Type,
    TypeVar,
    Union,
)

import requests
from pydantic import BaseModel, ConfigDict, ValidationError

from ..config.loader import InsightConfig
from ..utils.logging import get_logger
from .encoder import QueryParams, encode_query_params, to_query_pairs
from .errors import QueryValidationError, SourceParseError, SourceTransportError
from .query import AggregationQueryOptions, QueryOptions

logger = get_logger(__name__)

CHAIN_ID_FIELD = "chain_id"


class Record(BaseModel):
    """Base for records returned by the remote service.

    Records are built without validation: the service is trusted to return
    the documented shape, and unknown keys are kept as extras.
    """

    model_config = ConfigDict(extra="allow")

    @classmethod
    def from_wire(cls, payload: Mapping[str, Any]):
        return cls.model_construct(**payload)


R = TypeVar("R", bound=Record)
T = TypeVar("T")


class SourceMeta(BaseModel):
    model_config = ConfigDict(extra="allow")

    chain_id: Optional[int] = None
    address: Optional[str] = None
    signature: Optional[str] = None
    page: Optional[int] = None
    limit: Optional[int] = None
    total_items: Optional[int] = None
    total_pages: Optional[int] = None


class SourceResponse(BaseModel, Generic[R]):
    """One page of records plus the service's pagination metadata."""

    meta: SourceMeta
    data: List[R]


class SourceAggregatedResponse(BaseModel, Generic[T]):
    """One row per group, each mapping group keys and aggregate labels to values."""

    meta: SourceMeta
    aggregations: List[T]


QueryOptionsInput = Union[QueryOptions, Mapping[str, Any], None]


class DataSource(Protocol[R]):
    """Capability shared by the events and transactions sources."""

    def get(self, chain_id: str, options: QueryOptionsInput = None) -> SourceResponse[R]:
        ...

    def get_aggregated(
        self,
        chain_id: str,
        options: QueryOptionsInput = None,
        row_type: Optional[Type[BaseModel]] = None,
    ) -> SourceAggregatedResponse:
        ...


class BaseSource(Generic[R]):
    """
    Generic source over one remote resource.

    Subclasses bind the resource path, the record model, and the field names
    that may be filtered and sorted on. Field names are checked before any
    request goes out.
    """

    path: ClassVar[str]
    record_type: ClassVar[Type[Record]]
    filter_fields: ClassVar[FrozenSet[str]]
    sort_fields: ClassVar[FrozenSet[str]]

    def __init__(self, config: InsightConfig):
        self.config = config

    def get(self, chain_id: str, options: QueryOptionsInput = None) -> SourceResponse[R]:
        """
        Fetch one page of records.

        Args:
            chain_id: Chain identifier selecting the network
            options: QueryOptions or an equivalent dict

        Returns:
            SourceResponse with the page's records and meta

        Raises:
            QueryValidationError: If the options break this source's contract
            SourceTransportError: On connection failure or non-2xx status
            SourceParseError: If the body is not a JSON object
        """
        if isinstance(options, AggregationQueryOptions):
            raise QueryValidationError(
                f"Aggregation options passed to {self.path}.get(); use get_aggregated()"
            )
        query = self._coerce_options(options, QueryOptions)
        query_params = self.convert_to_query_params(query)
        payload = self.fetch(chain_id, self.path, query_params)
        return SourceResponse[self.record_type].model_construct(
            meta=self._build_meta(payload),
            data=[self.record_type.from_wire(row) for row in self._rows(payload, "data")],
        )

    def get_aggregated(
        self,
        chain_id: str,
        options: QueryOptionsInput = None,
        row_type: Optional[Type[BaseModel]] = None,
    ) -> SourceAggregatedResponse:
        """
        Run an aggregation query.

        ``row_type`` describes the shape of each aggregation row (group keys
        plus computed labels). Rows stay plain dicts when it is omitted.
        """
        query = self._coerce_options(options, AggregationQueryOptions)
        query_params = self.convert_to_query_params(query)
        payload = self.fetch(chain_id, self.path, query_params)
        rows = self._rows(payload, "aggregations")
        if row_type is not None:
            try:
                rows = [row_type.model_validate(row) for row in rows]
            except ValidationError as e:
                raise SourceParseError(f"Aggregation rows from {self.path} do not match {row_type.__name__}: {e}") from e
        return SourceAggregatedResponse.model_construct(meta=self._build_meta(payload), aggregations=rows)

    def convert_to_query_params(self, options: Optional[QueryOptions]) -> QueryParams:
        """Validate field names against this source, then encode."""
        if options is not None:
            self._validate_fields(options)
        return encode_query_params(options)

    def build_url(self, chain_id: str, path: str) -> str:
        chain = str(chain_id).strip()
        if not chain:
            raise QueryValidationError("chain_id must not be empty")
        return f"{self.config.base_url(chain)}/{path}"

    def fetch(self, chain_id: str, path: str, query_params: QueryParams) -> Any:
        """
        Issue one GET against ``path`` on the given chain and return parsed JSON.

        Raises:
            SourceTransportError: On connection failure or non-2xx status
            SourceParseError: If the body is not valid JSON
        """
        url = self.build_url(chain_id, path)
        logger.debug(f"GET {path} on chain {chain_id} with params {sorted(query_params)}")
        try:
            response = requests.get(
                url,
                params=to_query_pairs(query_params),
                headers=self._get_headers(),
                timeout=self.config.timeout_seconds,
            )
        except requests.RequestException as e:
            raise SourceTransportError(f"Failed to reach data source for {path} on chain {chain_id}: {e}") from e

        if not 200 <= response.status_code < 300:
            body = response.text
            logger.warning(f"Data source {path} on chain {chain_id} returned status {response.status_code}")
            raise SourceTransportError(
                f"Data source returned non-success status: {response.status_code}. {body}",
                status_code=response.status_code,
                body=body,
            )

        try:
            return response.json()
        except ValueError as e:
            raise SourceParseError(f"Data source returned invalid JSON for {path} on chain {chain_id}: {e}") from e

    def _get_headers(self) -> Dict[str, str]:
        return {
            "User-Agent": self.config.user_agent,
            "Accept": "application/json",
        }

    def _coerce_options(self, options: QueryOptionsInput, model: Type[QueryOptions]) -> Optional[QueryOptions]:
        if options is None or isinstance(options, model):
            return options
        if isinstance(options, QueryOptions):
            # Plain options are valid aggregation input only once given an aggregation.
            options = options.model_dump(exclude_none=True)
        try:
            return model.model_validate(options)
        except ValidationError as e:
            raise QueryValidationError(f"Invalid query options for {self.path}: {e}") from e

    def _validate_fields(self, options: QueryOptions) -> None:
        if CHAIN_ID_FIELD in options.filters:
            raise QueryValidationError(
                f"'{CHAIN_ID_FIELD}' cannot be filtered on; pass the chain as the chain_id argument"
            )
        _require_known(options.filters, self.filter_fields, f"filter field(s) for {self.path}")
        if isinstance(options, AggregationQueryOptions):
            # Sort keys may name aggregate labels, which only the service knows.
            _require_known(options.group_by_fields, self.filter_fields | {CHAIN_ID_FIELD}, f"group_by field(s) for {self.path}")
        elif options.order_by is not None:
            _require_known(options.order_by.fields, self.sort_fields, f"sort field(s) for {self.path}")

    def _build_meta(self, payload: Any) -> SourceMeta:
        if not isinstance(payload, dict):
            raise SourceParseError(f"Data source returned {type(payload).__name__} for {self.path}, expected an object")
        meta = payload.get("meta") or {}
        if not isinstance(meta, dict):
            raise SourceParseError(f"Data source returned a malformed meta envelope for {self.path}")
        return SourceMeta.model_construct(**meta)

    def _rows(self, payload: Any, key: str) -> List[Any]:
        if not isinstance(payload, dict):
            raise SourceParseError(f"Data source returned {type(payload).__name__} for {self.path}, expected an object")
        return list(payload.get(key) or [])


def _require_known(names: Iterable[str], allowed: FrozenSet[str], what: str) -> None:
    unknown = sorted(set(names) - allowed)
    if unknown:
        raise QueryValidationError(f"Unknown {what}: {', '.join(unknown)}")
