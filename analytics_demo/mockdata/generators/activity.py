import datetime as dt
from typing import Dict, List, Sequence

import numpy as np
import pandas as pd

from ..calendar_rules import (
    EXAM_FACTOR,
    HOLIDAY_FACTOR,
    WEEKEND_FACTOR,
    is_holiday_window,
    is_near_recurring_event,
    is_weekend,
)
from ...utils import round_half_up
from ..sequence import seeded_int, seeded_random

ACTIVITY_START = dt.date(2025, 1, 1)
ACTIVITY_END = dt.date(2025, 6, 30)

MIN_DAU = 20


def activity_days() -> pd.DatetimeIndex:
    return pd.date_range(ACTIVITY_START, ACTIVITY_END, freq="D")


def _half_up(values: np.ndarray) -> np.ndarray:
    return np.floor(values + 0.5).astype(int)


def generate_dau() -> List[dict]:
    """Daily active users and sessions over the activity window.

    Baseline grows linearly from ~60 to ~150; weekends run at roughly half of
    weekdays, the lunar new year holiday dips and the fortnight before each
    exam spikes.
    """
    days = activity_days()
    idx = np.arange(len(days))
    progress = idx / (len(days) - 1)
    base = 60 + 90 * progress

    weekend = np.array([is_weekend(d) for d in days])
    holiday = np.array([is_holiday_window(d) for d in days])
    near_exam = np.array([is_near_recurring_event(d) for d in days])

    weekend_jitter = np.array([seeded_int(i + 2000, -10, 10) for i in idx])
    weekday_jitter = np.array([seeded_int(i + 3000, -15, 15) for i in idx])
    dau = np.where(weekend, base * WEEKEND_FACTOR + weekend_jitter, base + weekday_jitter)
    dau = np.where(holiday, dau * HOLIDAY_FACTOR, dau)
    dau = np.where(near_exam, dau * EXAM_FACTOR, dau)

    dau = _half_up(np.maximum(MIN_DAU, dau + seeded_random(idx) * 10 - 5))
    sessions = _half_up(dau * (1.3 + seeded_random(idx + 1000) * 0.2))

    df = pd.DataFrame({
        "activity_date": days.strftime("%Y-%m-%d"),
        "active_users": dau,
        "sessions": sessions,
    })
    return df.to_dict(orient="records")


def generate_mau() -> List[dict]:
    return [
        {"month_start": "2025-01-01", "mau": 420},
        {"month_start": "2025-02-01", "mau": 580},
        {"month_start": "2025-03-01", "mau": 820},
        {"month_start": "2025-04-01", "mau": 950},
        {"month_start": "2025-05-01", "mau": 1150},
        {"month_start": "2025-06-01", "mau": 1350},
    ]


def generate_retention_cohorts() -> List[dict]:
    """Monthly signup cohorts flattened to one row per cohort week.

    Weeks the youngest cohort has not reached yet are omitted, not zeroed.
    """
    cohorts = [
        ("2025-01", 180, [100, 45, 32, 25, 20, 17, 15]),
        ("2025-02", 220, [100, 48, 35, 27, 22, 18, 16]),
        ("2025-03", 310, [100, 52, 38, 30, 24, 20, 17]),
        ("2025-04", 280, [100, 50, 36, 28, 23, 19, 16]),
        ("2025-05", 290, [100, 55, 40, 32, 26, 22, 19]),
        ("2025-06", 220, [100, 53, 38, None, None, None, None]),
    ]
    rows = []
    for month, size, retention in cohorts:
        for week, rate in enumerate(retention):
            if rate is None:
                continue
            rows.append({
                "cohort_month": month,
                "cohort_size": size,
                "week_number": week,
                "retention_rate": rate,
                "retained_users": round_half_up(size * rate / 100),
            })
    return rows


def generate_retention_summary() -> List[dict]:
    # Percentages, not fractions
    return [{
        "total_users": 1500,
        "d1_retention": 42.0,
        "d1_eligible_users": 1420,
        "d7_retention": 28.0,
        "d7_eligible_users": 1280,
        "d30_retention": 16.0,
        "d30_eligible_users": 980,
        "avg_sessions_per_user": 4.2,
    }]


def generate_weekly_retention() -> List[dict]:
    first_monday = dt.date(2025, 1, 6)
    rows = []
    for i in range(26):
        week_start = first_monday + dt.timedelta(weeks=i)
        rate = 0.25 + i * 0.005 + seeded_random(i) * 0.1 - 0.05
        rows.append({
            "week_start": week_start.isoformat(),
            "retention_rate": min(0.45, max(0.15, rate)),
            "active_users": seeded_int(i + 4000, 400, 800),
            "returning_users": seeded_int(i + 5000, 100, 300),
        })
    return rows


FEATURES = (
    # name, base adoption, growth rate (0 = stable)
    ("Assessment", 0.78, 0.0),
    ("Brain Teaser", 0.35, 0.08),
    ("Ask AI", 0.15, 0.127),
    ("Session Review", 0.40, 0.05),
    ("Collection Import", 0.25, 0.0),
    ("Word Added", 0.45, 0.0),
    ("Study Plan (Gen)", 0.20, 0.06),
    ("Study Plan (Comp)", 0.15, 0.05),
)
FALLBACK_DAU = 100


def generate_feature_adoption(dau: Sequence[dict]) -> List[dict]:
    """Per-feature daily users, scaled by the cached DAU row of the same day."""
    dau_by_date: Dict[str, int] = {r["activity_date"]: r["active_users"] for r in dau}
    rows = []
    for day_index, day in enumerate(activity_days()):
        date = day.strftime("%Y-%m-%d")
        day_dau = dau_by_date.get(date, FALLBACK_DAU)
        progress = day_index / 180
        for name, base, growth in FEATURES:
            adoption = base + growth * progress * 5
            adoption += seeded_random(day_index + len(name)) * 0.1 - 0.05
            adoption = max(0.05, min(0.95, adoption))
            rows.append({
                "usage_date": date,
                "feature_type": name,
                "unique_users": round_half_up(day_dau * adoption),
                "total_usage": round_half_up(day_dau * adoption * (1.5 + seeded_random(day_index) * 0.5)),
            })
    return rows


def generate_feature_usage() -> List[dict]:
    return [
        {"feature_type": "vocabularyWordsLimit", "total_usage": 12500, "unique_users": 850},
        {"feature_type": "errorBankCapacity", "total_usage": 3800, "unique_users": 620},
    ]


def generate_exam_cycle_engagement() -> List[dict]:
    return [
        {"days_until_sat": "0-7", "avg_dau": 180, "engagement_multiplier": 1.8, "label": "Cramming"},
        {"days_until_sat": "8-14", "avg_dau": 145, "engagement_multiplier": 1.45, "label": "Final prep"},
        {"days_until_sat": "15-21", "avg_dau": 125, "engagement_multiplier": 1.25, "label": "Intensive"},
        {"days_until_sat": "22-30", "avg_dau": 110, "engagement_multiplier": 1.1, "label": "Building"},
        {"days_until_sat": "30+", "avg_dau": 100, "engagement_multiplier": 1.0, "label": "Baseline"},
    ]


def generate_attempt_durations() -> List[dict]:
    buckets = [
        (0, 10, 1250), (10, 20, 2340), (20, 30, 3180), (30, 45, 2890),
        (45, 60, 1820), (60, 90, 980), (90, 120, 420),
    ]
    rows = [
        {"min_minutes": lo, "max_minutes": hi, "label": f"{lo}-{hi}m", "count": n}
        for lo, hi, n in buckets
    ]
    rows.append({"min_minutes": 120, "max_minutes": 999, "label": "120m+", "count": 180})
    return rows
