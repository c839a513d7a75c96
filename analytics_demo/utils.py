import asyncio
import datetime as dt
import math
from typing import Union

import numpy as np
import pandas as pd

DateLike = Union[dt.date, dt.datetime, pd.Timestamp, str]


def to_date(value: DateLike) -> dt.date:
    """Normalize an ISO string, datetime or Timestamp to a plain date."""
    if isinstance(value, str):
        return dt.date.fromisoformat(value[:10])
    if isinstance(value, dt.datetime):  # pd.Timestamp is a datetime subclass
        return value.date()
    return value


def format_date(value: DateLike) -> str:
    return to_date(value).isoformat()


def round_half_up(x: float) -> int:
    """Round .5 away from zero for positives, the way chart data was authored."""
    return int(math.floor(x + 0.5))


def fmt_count(x: float) -> str:
    """Compact human-readable count formatting (e.g., 12K, 7M)."""
    for unit in ["", "K", "M", "B"]:
        if abs(x) < 1000.0:
            return f"{x:,.0f}{unit}"
        x /= 1000.0
    return f"{x:,.0f}T"


async def random_delay(min_ms: int, max_ms: int) -> None:
    """Sleep for a uniformly random duration between the two bounds."""
    delay = (min_ms + np.random.random() * (max_ms - min_ms)) / 1000.0
    await asyncio.sleep(delay)


async def fixed_delay(ms: int) -> None:
    await asyncio.sleep(ms / 1000.0)
