"""Fluent builders for request models.

Setters only stage values; required fields are checked once, in ``build()``.
Limits the upstream enforces (page size, symbols per request) are logged
when exceeded but never rejected here.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date, datetime

from market_eod.config import Settings, get_settings
from market_eod.data.exceptions import MissingRequiredFieldError
from market_eod.models.client import ClientSyncConfig
from market_eod.models.eod import EndpointType, EodQuery, EodRequest, SortOrder

logger = logging.getLogger(__name__)


class EodQueryBuilder:
    """Stages :class:`EodQuery` fields. ``access_key`` and ``symbols`` are required."""

    def __init__(self) -> None:
        self._access_key: str | None = None
        self._symbols: list[str] = []
        self._exchange: str | None = None
        self._sort: SortOrder | None = SortOrder.default()
        self._date_from: date | datetime | None = None
        self._date_to: date | datetime | None = None
        self._limit: int | None = None
        self._offset: int | None = None
        self._settings: Settings | None = None

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> EodQueryBuilder:
        """Start a builder with the configured access key."""
        builder = cls()
        builder._settings = settings or get_settings()
        return builder.access_key(builder._settings.api.resolved_access_key())

    def access_key(self, value: str) -> EodQueryBuilder:
        self._access_key = value
        return self

    def symbols(self, values: Iterable[str]) -> EodQueryBuilder:
        """Replace the staged symbols. A bare string counts as one symbol."""
        if isinstance(values, str):
            values = [values]
        self._symbols = list(values)
        return self

    def symbol(self, value: str) -> EodQueryBuilder:
        self._symbols.append(value)
        return self

    def exchange(self, mic: str | None) -> EodQueryBuilder:
        self._exchange = mic
        return self

    def sort(self, value: SortOrder | str | None) -> EodQueryBuilder:
        self._sort = None if value is None else SortOrder.parse(value)
        return self

    def date_from(self, value: date | datetime | None) -> EodQueryBuilder:
        self._date_from = value
        return self

    def date_to(self, value: date | datetime | None) -> EodQueryBuilder:
        self._date_to = value
        return self

    def limit(self, value: int | None) -> EodQueryBuilder:
        self._limit = value
        return self

    def offset(self, value: int | None) -> EodQueryBuilder:
        self._offset = value
        return self

    def build(self) -> EodQuery:
        """Freeze staged values into an :class:`EodQuery`.

        Raises:
            MissingRequiredFieldError: ``access_key`` empty or no symbols staged.
        """
        if not self._access_key:
            raise MissingRequiredFieldError("access_key")
        if not self._symbols:
            raise MissingRequiredFieldError("symbols")
        self._warn_upstream_limits()
        return EodQuery(
            access_key=self._access_key,
            symbols=tuple(self._symbols),
            exchange=self._exchange,
            sort=self._sort,
            date_from=self._date_from,
            date_to=self._date_to,
            limit=self._limit,
            offset=self._offset,
        )

    def _warn_upstream_limits(self) -> None:
        api = (self._settings or get_settings()).api
        if self._limit is not None and self._limit > api.max_limit:
            logger.warning("limit=%d exceeds upstream maximum %d", self._limit, api.max_limit)
        if len(self._symbols) > api.max_symbols:
            logger.warning(
                "%d symbols requested; upstream accepts at most %d per request",
                len(self._symbols), api.max_symbols,
            )
        if self._date_from is not None and self._date_to is not None:
            if _as_date(self._date_from) > _as_date(self._date_to):
                logger.warning("date_from %s is after date_to %s", self._date_from, self._date_to)


def _as_date(value: date | datetime) -> date:
    return value.date() if isinstance(value, datetime) else value


class EodRequestBuilder:
    """Stages :class:`EodRequest` fields. ``query`` is required; endpoint defaults to latest."""

    def __init__(self) -> None:
        self._endpoint_type = EndpointType.latest()
        self._query: EodQuery | None = None

    def endpoint_type(self, value: EndpointType | date | str) -> EodRequestBuilder:
        self._endpoint_type = EndpointType.parse(value)
        return self

    def latest(self) -> EodRequestBuilder:
        self._endpoint_type = EndpointType.latest()
        return self

    def on(self, day: date) -> EodRequestBuilder:
        self._endpoint_type = EndpointType.for_date(day)
        return self

    def query(self, value: EodQuery) -> EodRequestBuilder:
        self._query = value
        return self

    def build(self) -> EodRequest:
        if self._query is None:
            raise MissingRequiredFieldError("query", model="EodRequest")
        return EodRequest(endpoint_type=self._endpoint_type, query=self._query)


class ClientSyncConfigBuilder:
    def __init__(self) -> None:
        self._is_free_tier = False

    def is_free_tier(self, flag: bool) -> ClientSyncConfigBuilder:
        self._is_free_tier = flag
        return self

    def build(self) -> ClientSyncConfig:
        return ClientSyncConfig(is_free_tier=self._is_free_tier)
