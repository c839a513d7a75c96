import asyncio
import datetime as dt

import pandas as pd
import pytest

from analytics_demo.utils import fixed_delay, fmt_count, format_date, random_delay, round_half_up, to_date


def test_to_date_accepts_common_inputs():
    assert to_date("2025-03-08") == dt.date(2025, 3, 8)
    assert to_date("2025-03-08T14:00:00Z") == dt.date(2025, 3, 8)
    assert to_date(dt.datetime(2025, 3, 8, 23, 59)) == dt.date(2025, 3, 8)
    assert to_date(pd.Timestamp("2025-03-08")) == dt.date(2025, 3, 8)
    assert format_date(dt.date(2025, 1, 2)) == "2025-01-02"


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(2.49) == 2


def test_fmt_count_ranges():
    assert fmt_count(0) == "0"
    assert fmt_count(999) == "999"
    assert fmt_count(12_300) == "12K"
    assert fmt_count(12_900) == "13K"
    assert fmt_count(7_000_000) == "7M"
    assert fmt_count(1_500_000_000) == "2B"
    assert fmt_count(2_000_000_000_000) == "2T"


@pytest.mark.asyncio
async def test_random_delay_within_bounds():
    loop = asyncio.get_running_loop()
    start = loop.time()
    await random_delay(10, 20)
    assert loop.time() - start >= 0.009


@pytest.mark.asyncio
async def test_zero_delays_return_immediately():
    await random_delay(0, 0)
    await fixed_delay(0)
