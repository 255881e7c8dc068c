"""End-of-day price request and response models.

Request side: :class:`EodQuery` (query-string parameters) and
:class:`EodRequest` (path prefix + endpoint variant + query).

Response side: :class:`EodResponse` mirrors the upstream JSON payload. Keys
arrive in camelCase (``adjHigh``, ``splitFactor``) and map onto snake_case
attributes through pydantic's alias generator. Missing or null scalar fields
fall back to zero values; a missing ``pagination`` or ``data`` block is an
error.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, field_validator, model_validator
from pydantic.alias_generators import to_camel

from market_eod.data.exceptions import UnsupportedValueError

if TYPE_CHECKING:
    from market_eod.query.builder import EodQueryBuilder, EodRequestBuilder


# --- Closed variants ---


class SortOrder(StrEnum):
    """Result ordering by date. Upstream default is descending."""

    ASCENDING = "ASC"
    DESCENDING = "DESC"

    @classmethod
    def default(cls) -> SortOrder:
        return cls.DESCENDING

    @classmethod
    def parse(cls, value: SortOrder | str) -> SortOrder:
        """Accept a member, ``ASC``/``DESC`` or ``ascending``/``descending``."""
        if isinstance(value, SortOrder):
            return value
        if isinstance(value, str):
            key = value.strip().upper()
            if key in ("ASC", "ASCENDING"):
                return cls.ASCENDING
            if key in ("DESC", "DESCENDING"):
                return cls.DESCENDING
        raise UnsupportedValueError("sort order", value)


class EndpointKind(StrEnum):
    LATEST = "latest"
    DATE = "date"


class EndpointType(BaseModel):
    """Which EOD path variant a request targets: latest data or a given day."""

    model_config = ConfigDict(frozen=True)

    kind: EndpointKind = EndpointKind.LATEST
    on: date | None = None

    @field_validator("on", mode="before")
    @classmethod
    def _date_only(cls, value: Any) -> Any:
        if isinstance(value, datetime):
            raise ValueError("endpoint date carries no time component")
        return value

    @model_validator(mode="after")
    def _check_variant(self) -> EndpointType:
        if self.kind == EndpointKind.DATE and self.on is None:
            raise ValueError("DATE endpoint requires a date")
        if self.kind == EndpointKind.LATEST and self.on is not None:
            raise ValueError("LATEST endpoint takes no date")
        return self

    @classmethod
    def latest(cls) -> EndpointType:
        return cls()

    @classmethod
    def for_date(cls, day: date) -> EndpointType:
        if isinstance(day, datetime) or not isinstance(day, date):
            raise UnsupportedValueError("endpoint date", day)
        return cls(kind=EndpointKind.DATE, on=day)

    @classmethod
    def parse(cls, value: EndpointType | date | str) -> EndpointType:
        """Accept ``"latest"``, a ``YYYY-MM-DD`` string, or a date."""
        if isinstance(value, EndpointType):
            return value
        if isinstance(value, date):
            return cls.for_date(value)
        if isinstance(value, str):
            text = value.strip()
            if text.lower() == EndpointKind.LATEST:
                return cls.latest()
            try:
                return cls.for_date(date.fromisoformat(text))
            except ValueError:
                raise UnsupportedValueError("endpoint type", value) from None
        raise UnsupportedValueError("endpoint type", value)

    @property
    def path_segment(self) -> str:
        if self.kind == EndpointKind.DATE:
            return self.on.isoformat()
        return EndpointKind.LATEST.value


# --- Request ---


def _format_date(value: date | datetime) -> str:
    """``YYYY-MM-DD`` for dates, ``YYYY-MM-DDTHH:MM:SS+ZZZZ`` for datetimes (naive = UTC)."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.strftime("%Y-%m-%dT%H:%M:%S%z")
    return value.isoformat()


class EodQuery(BaseModel):
    """Query-string parameters of an EOD request.

    Each symbol is billed as one API request upstream. ``limit`` caps at 1000
    upstream; that cap is enforced remotely, not here.

    An unknown ``sort`` string passed straight to the model surfaces as a
    pydantic ``ValidationError`` wrapping :class:`UnsupportedValueError`;
    :meth:`SortOrder.parse` and the builder raise it unwrapped.
    """

    model_config = ConfigDict(frozen=True)

    access_key: str
    symbols: tuple[str, ...]
    exchange: str | None = None  # MIC, e.g. "XNAS"
    sort: SortOrder | None = SortOrder.DESCENDING
    date_from: datetime | date | None = None  # inclusive
    date_to: datetime | date | None = None  # inclusive
    limit: NonNegativeInt | None = None  # upstream default 100
    offset: NonNegativeInt | None = None  # upstream default 0

    @field_validator("sort", mode="before")
    @classmethod
    def _parse_sort(cls, value: Any) -> Any:
        if value is None:
            return value
        return SortOrder.parse(value)

    @classmethod
    def builder(cls) -> EodQueryBuilder:
        from market_eod.query.builder import EodQueryBuilder

        return EodQueryBuilder()

    def to_params(self) -> dict[str, str]:
        """Render as URL query parameters. Unset optional fields are omitted."""
        params = {
            "access_key": self.access_key,
            "symbols": ",".join(self.symbols),
        }
        if self.exchange is not None:
            params["exchange"] = self.exchange
        if self.sort is not None:
            params["sort"] = self.sort.value
        if self.date_from is not None:
            params["date_from"] = _format_date(self.date_from)
        if self.date_to is not None:
            params["date_to"] = _format_date(self.date_to)
        if self.limit is not None:
            params["limit"] = str(self.limit)
        if self.offset is not None:
            params["offset"] = str(self.offset)
        return params


def _default_eod_path() -> str:
    from market_eod.config import get_settings

    return get_settings().api.eod_path


class EodRequest(BaseModel):
    """Path prefix + endpoint variant + query. Host and transport live elsewhere."""

    model_config = ConfigDict(frozen=True)

    endpoint: str = Field(default_factory=_default_eod_path)
    endpoint_type: EndpointType = Field(default_factory=EndpointType.latest)
    query: EodQuery

    @classmethod
    def builder(cls) -> EodRequestBuilder:
        from market_eod.query.builder import EodRequestBuilder

        return EodRequestBuilder()

    @property
    def path(self) -> str:
        """``/eod/latest`` or ``/eod/2020-01-01``."""
        return f"{self.endpoint.rstrip('/')}/{self.endpoint_type.path_segment}"

    def params(self) -> dict[str, str]:
        return self.query.to_params()


# --- Response ---


class _WireModel(BaseModel):
    """camelCase on the wire, snake_case in Python. Nulls fall back to defaults."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class Pagination(_WireModel):
    limit: NonNegativeInt = 0
    offset: NonNegativeInt = 0
    count: NonNegativeInt = 0  # results on this page
    total: NonNegativeInt = 0  # results available overall

    @property
    def next_offset(self) -> int | None:
        """Offset of the following page, or None when this page is the last."""
        end = self.offset + self.count
        if self.count == 0 or end >= self.total:
            return None
        return end


class DailyRecord(_WireModel):
    """One symbol's OHLCV for one day, raw and split/dividend-adjusted (CRSP)."""

    open: float = 0.0
    high: float = 0.0
    low: float = 0.0
    close: float = 0.0
    volume: float = 0.0
    adj_high: float = 0.0
    adj_low: float = 0.0
    adj_close: float = 0.0
    adj_open: float = 0.0
    adj_volume: float = 0.0
    split_factor: float = 0.0
    dividend: float = 0.0
    symbol: str = ""
    exchange: str = ""  # MIC
    date: str = ""  # ISO-8601 UTC timestamp, kept verbatim


class EodResponse(BaseModel):
    """One page of EOD results. ``data`` keeps the upstream order."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    pagination: Pagination
    data: tuple[DailyRecord, ...]
