"""pandas view of an EOD response in the Open/High/Low/Close/Volume convention."""

from __future__ import annotations

import pandas as pd

from market_eod.data.exceptions import MalformedResponseError
from market_eod.models.eod import EodResponse

_RAW_FIELDS = {
    "Open": "open",
    "High": "high",
    "Low": "low",
    "Close": "close",
    "Volume": "volume",
}

_ADJUSTED_FIELDS = {
    "Open": "adj_open",
    "High": "adj_high",
    "Low": "adj_low",
    "Close": "adj_close",
    "Volume": "adj_volume",
}

_COLUMNS = ["Open", "High", "Low", "Close", "Volume", "Symbol", "Exchange"]


def records_to_frame(response: EodResponse, adjusted: bool = False) -> pd.DataFrame:
    """One row per record, indexed by UTC timestamp, in upstream order (not re-sorted).

    Args:
        response: Parsed EOD page.
        adjusted: Use split/dividend-adjusted prices and volume.
    """
    fields = _ADJUSTED_FIELDS if adjusted else _RAW_FIELDS
    rows = []
    for record in response.data:
        row = {column: getattr(record, attr) for column, attr in fields.items()}
        row["Symbol"] = record.symbol
        row["Exchange"] = record.exchange
        rows.append(row)

    missing = [i for i, record in enumerate(response.data) if not record.date]
    if missing:
        raise MalformedResponseError("record date is missing", [f"data.{i}.date: empty" for i in missing])

    try:
        timestamps = pd.to_datetime([record.date for record in response.data], utc=True, format="ISO8601")
    except ValueError as e:
        raise MalformedResponseError("record date is not ISO-8601", [str(e)]) from e

    index = pd.DatetimeIndex(timestamps, name="Date")
    return pd.DataFrame(rows, index=index, columns=_COLUMNS)
