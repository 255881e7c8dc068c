"""Shared test fixtures for market_eod tests."""

import copy
from pathlib import Path
from unittest.mock import patch

import pytest

from market_eod.config import reset_settings

_SAMPLE_RECORD = {
    "open": 1.0,
    "high": 2.0,
    "low": 0.5,
    "close": 1.5,
    "volume": 100.0,
    "adjHigh": 2.0,
    "adjLow": 0.5,
    "adjClose": 1.5,
    "adjOpen": 1.0,
    "adjVolume": 100.0,
    "splitFactor": 1.0,
    "dividend": 0.0,
    "symbol": "AAPL",
    "exchange": "XNAS",
    "date": "2020-01-01T00:00:00+0000",
}


@pytest.fixture(autouse=True)
def _isolated_settings(tmp_path: Path):
    """Keep ~/.market_eod/config.yaml out of tests; point it at tmp_path instead."""
    reset_settings()
    with patch("market_eod.config._USER_CONFIG_PATH", tmp_path / "config.yaml"):
        yield
    reset_settings()


@pytest.fixture
def user_config(tmp_path: Path) -> Path:
    """Path the (patched) loader reads user overrides from."""
    return tmp_path / "config.yaml"


@pytest.fixture
def record_payload() -> dict:
    return copy.deepcopy(_SAMPLE_RECORD)


@pytest.fixture
def response_payload(record_payload: dict) -> dict:
    return {
        "pagination": {"limit": 10, "offset": 0, "count": 1, "total": 1},
        "data": [record_payload],
    }


@pytest.fixture
def multi_day_payload() -> dict:
    """Three AAPL days, deliberately ascending to check order is kept."""
    days = []
    for i, day in enumerate(["2024-03-01", "2024-03-04", "2024-03-05"]):
        rec = copy.deepcopy(_SAMPLE_RECORD)
        rec.update(
            open=170.0 + i,
            high=172.0 + i,
            low=169.0 + i,
            close=171.0 + i,
            volume=5_000_000.0 + i * 1000,
            adjOpen=85.0 + i,
            adjHigh=86.0 + i,
            adjLow=84.5 + i,
            adjClose=85.5 + i,
            adjVolume=10_000_000.0 + i * 2000,
            splitFactor=1.0,
            date=f"{day}T00:00:00+0000",
        )
        days.append(rec)
    return {
        "pagination": {"limit": 3, "offset": 0, "count": 3, "total": 250},
        "data": days,
    }
