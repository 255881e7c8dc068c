"""Typed request builders and response models for end-of-day stock price data."""

# Config
from market_eod.config import Settings, get_settings

# Models
from market_eod.models.client import ClientSyncConfig
from market_eod.models.eod import (
    DailyRecord,
    EndpointKind,
    EndpointType,
    EodQuery,
    EodRequest,
    EodResponse,
    Pagination,
    SortOrder,
)

# Builders
from market_eod.query.builder import ClientSyncConfigBuilder, EodQueryBuilder, EodRequestBuilder

# Codec
from market_eod.data.codec import (
    dump_daily_record,
    dump_eod_response,
    parse_daily_record,
    parse_eod_response,
)
from market_eod.data.frame import records_to_frame

# Errors
from market_eod.data.exceptions import (
    MalformedResponseError,
    MissingRequiredFieldError,
    UnsupportedValueError,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Request models
    "SortOrder",
    "EndpointKind",
    "EndpointType",
    "EodQuery",
    "EodRequest",
    "ClientSyncConfig",
    # Response models
    "Pagination",
    "DailyRecord",
    "EodResponse",
    # Builders
    "EodQueryBuilder",
    "EodRequestBuilder",
    "ClientSyncConfigBuilder",
    # Functions
    "parse_eod_response",
    "dump_eod_response",
    "parse_daily_record",
    "dump_daily_record",
    "records_to_frame",
    # Errors
    "MissingRequiredFieldError",
    "MalformedResponseError",
    "UnsupportedValueError",
]
