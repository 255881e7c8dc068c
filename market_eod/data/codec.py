"""JSON <-> model conversion for EOD responses."""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import ValidationError

from market_eod.data.exceptions import MalformedResponseError
from market_eod.models.eod import DailyRecord, EodResponse

logger = logging.getLogger(__name__)


def _load(payload: dict | str | bytes) -> Any:
    if isinstance(payload, (str, bytes, bytearray)):
        try:
            return json.loads(payload)
        except json.JSONDecodeError as e:
            raise MalformedResponseError("body is not valid JSON", [str(e)]) from e
    return payload


def _describe(exc: ValidationError) -> list[str]:
    """Flatten pydantic errors to ``loc: msg`` strings, e.g. ``data.0.open: ...``."""
    described = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err["loc"]) or "<root>"
        described.append(f"{loc}: {err['msg']}")
    return described


def parse_eod_response(payload: dict | str | bytes) -> EodResponse:
    """Parse a raw EOD body (decoded dict or JSON text).

    Missing per-record numbers become 0.0; a missing or mistyped
    ``pagination``/``data`` block raises.

    Raises:
        MalformedResponseError: Invalid JSON or a shape mismatch.
    """
    body = _load(payload)
    if not isinstance(body, dict):
        raise MalformedResponseError(f"expected a JSON object, got {type(body).__name__}")
    try:
        response = EodResponse.model_validate(body)
    except ValidationError as e:
        raise MalformedResponseError("payload does not match the EOD response shape", _describe(e)) from e
    logger.debug(
        "Parsed EOD page: offset=%d count=%d total=%d",
        response.pagination.offset, response.pagination.count, response.pagination.total,
    )
    return response


def dump_eod_response(response: EodResponse) -> dict:
    """camelCase dict matching the upstream wire shape."""
    return response.model_dump(mode="json", by_alias=True)


def parse_daily_record(payload: dict) -> DailyRecord:
    try:
        return DailyRecord.model_validate(payload)
    except ValidationError as e:
        raise MalformedResponseError("record does not match the EOD data shape", _describe(e)) from e


def dump_daily_record(record: DailyRecord) -> dict:
    return record.model_dump(mode="json", by_alias=True)
