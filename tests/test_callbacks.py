import pandas as pd
import pytest
from pydantic import ValidationError

from analytics_demo.callbacks import (
    Filters,
    build_figures,
    dau_query,
    feature_query,
    feature_totals,
    summarize_dau,
    weekday_pattern,
)


def make_dau():
    data = [
        {"activity_date": "2025-03-03", "active_users": 100, "sessions": 140},  # Mon
        {"activity_date": "2025-03-04", "active_users": 120, "sessions": 160},  # Tue
        {"activity_date": "2025-03-08", "active_users": 60, "sessions": 80},    # Sat
        {"activity_date": "2025-03-10", "active_users": 110, "sessions": 150},  # Mon
    ]
    return pd.DataFrame(data)


def test_filters_normalize_dates_and_lists():
    f = Filters(start_date="2025-03-01T00:00:00", end_date="2025-03-07", features="Ask AI")
    assert f.start_date == "2025-03-01"
    assert f.end_date == "2025-03-07"
    assert f.features == ["Ask AI"]
    assert Filters(features="").features is None


def test_filters_reject_reversed_range():
    with pytest.raises(ValidationError):
        Filters(start_date="2025-03-07", end_date="2025-03-01")


def test_query_builders_record_window():
    flt = Filters(start_date="2025-03-01", end_date="2025-03-07", features=["Ask AI"])
    dau = dau_query(flt).descriptor
    assert dau.table == "dau"
    assert [(f.column, f.op, f.operand) for f in dau.filters] == [
        ("activity_date", "gte", "2025-03-01"),
        ("activity_date", "lte", "2025-03-07"),
    ]
    assert dau.ordering.column == "activity_date"
    features = feature_query(flt).descriptor
    assert features.filters[0].op == "in"
    assert features.filters[0].operand == ("Ask AI",)


def test_summarize_dau():
    kpis = summarize_dau(make_dau())
    assert kpis["avg_dau"] == "98"
    assert kpis["peak_dau"] == "120"
    assert kpis["sessions"] == "530"
    assert kpis["sessions_per_user"] == "1.36"
    assert summarize_dau(pd.DataFrame())["avg_dau"] == "-"


def test_weekday_pattern_is_monday_first():
    pattern = weekday_pattern(make_dau())
    assert pattern["day"].tolist()[0] == "Mon"
    assert pattern["active_users"].tolist()[0] == 105.0
    assert pattern["active_users"].tolist()[2] is None


def test_feature_totals_sorted_desc():
    df = pd.DataFrame([
        {"feature_type": "A", "unique_users": 10},
        {"feature_type": "B", "unique_users": 30},
        {"feature_type": "A", "unique_users": 20},
    ])
    totals = feature_totals(df)
    assert totals["feature_type"].tolist() == ["B", "A"]
    assert totals["unique_users"].tolist() == [30.0, 15.0]


def test_build_figures_handles_empty_frames():
    trend, weekday, features = build_figures(pd.DataFrame(), pd.DataFrame())
    assert trend["data"] == []
    assert weekday["data"][0]["x"] == []
    assert features["data"][0]["y"] == []
