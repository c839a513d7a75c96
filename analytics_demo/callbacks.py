from typing import Dict, List, Optional

import pandas as pd
from dash import Input, Output, State
from pydantic import BaseModel, ValidationError, field_validator, model_validator

from .data import analytics, clear_cache, fetch_frame, get_client
from .mockdata import QueryBuilder
from .utils import fmt_count, format_date

WEEKDAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
EMPTY_KPIS = {"avg_dau": "-", "peak_dau": "-", "sessions": "-", "sessions_per_user": "-"}


class Filters(BaseModel):
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    features: Optional[List[str]] = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def normalize_date(cls, v):
        if v is None or v == "":
            return None
        return format_date(v)

    @field_validator("features", mode="before")
    @classmethod
    def ensure_list(cls, v):
        if v is None or v == "":
            return None
        if isinstance(v, list):
            return v
        return [v]

    @model_validator(mode="after")
    def _check_range(self):
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")
        return self


def _date_window(builder: QueryBuilder, column: str, flt: Filters) -> QueryBuilder:
    if flt.start_date:
        builder = builder.gte(column, flt.start_date)
    if flt.end_date:
        builder = builder.lte(column, flt.end_date)
    return builder.order(column)


def dau_query(flt: Filters) -> QueryBuilder:
    return _date_window(analytics.from_("dau").select("*"), "activity_date", flt)


def feature_query(flt: Filters) -> QueryBuilder:
    builder = analytics.from_("daily_feature_adoption").select("*")
    if flt.features:
        builder = builder.in_("feature_type", flt.features)
    return _date_window(builder, "usage_date", flt)


def summarize_dau(df: pd.DataFrame) -> Dict[str, str]:
    if df.empty:
        return dict(EMPTY_KPIS)
    users = int(df["active_users"].sum())
    sessions = int(df["sessions"].sum())
    return {
        "avg_dau": fmt_count(df["active_users"].mean()),
        "peak_dau": fmt_count(df["active_users"].max()),
        "sessions": fmt_count(sessions),
        "sessions_per_user": f"{sessions / users:.2f}" if users else "-",
    }


def weekday_pattern(df: pd.DataFrame) -> pd.DataFrame:
    """Mean active users per weekday, Monday first."""
    if df.empty:
        return pd.DataFrame(columns=["day", "active_users"])
    weekday = pd.to_datetime(df["activity_date"]).dt.dayofweek
    means = df.groupby(weekday)["active_users"].mean().reindex(range(7))
    values = [None if pd.isna(v) else round(float(v), 1) for v in means]
    return pd.DataFrame({"day": WEEKDAY_NAMES, "active_users": pd.Series(values, dtype=object)})


def feature_totals(df: pd.DataFrame) -> pd.DataFrame:
    """Average daily unique users per feature, most adopted first."""
    if df.empty:
        return pd.DataFrame(columns=["feature_type", "unique_users"])
    grouped = df.groupby("feature_type")["unique_users"].mean().round(1).reset_index()
    return grouped.sort_values("unique_users", ascending=False).reset_index(drop=True)


def _empty_fig():
    return {"data": [], "layout": {"paper_bgcolor": "white", "plot_bgcolor": "white"}}


def build_figures(dau: pd.DataFrame, features: pd.DataFrame):
    if dau.empty:
        trend_fig = _empty_fig()
    else:
        trend_fig = {
            "data": [
                {"type": "scatter", "mode": "lines", "x": dau["activity_date"].tolist(), "y": dau["active_users"].tolist(), "name": "DAU"},
                {"type": "scatter", "mode": "lines", "x": dau["activity_date"].tolist(), "y": dau["sessions"].tolist(), "name": "Sessions"},
            ],
            "layout": {"title": "Daily Active Users", "paper_bgcolor": "white", "plot_bgcolor": "white"}
        }

    pattern = weekday_pattern(dau)
    weekday_fig = {
        "data": [{"type": "bar", "x": pattern["day"].tolist(), "y": pattern["active_users"].tolist(), "name": "Avg DAU"}],
        "layout": {"title": "Average DAU by Weekday", "paper_bgcolor": "white", "plot_bgcolor": "white"}
    }

    totals = feature_totals(features)
    feature_fig = {
        "data": [{"type": "bar", "orientation": "h", "x": totals["unique_users"].tolist(), "y": totals["feature_type"].tolist(),
                  "name": "Avg daily users"}],
        "layout": {"title": "Feature Adoption", "paper_bgcolor": "white", "plot_bgcolor": "white"}
    }
    return trend_fig, weekday_fig, feature_fig


def register_callbacks(app):

    @app.callback(
        Output("data-version", "data"),
        Input("regenerate-btn", "n_clicks"),
        State("data-version", "data"),
        prevent_initial_call=True
    )
    def regenerate(n_clicks, version):
        """Drop cached snapshots so the next read rebuilds every table."""
        clear_cache()
        return (version or 0) + 1

    @app.callback(
        Output("kpi-avg-dau", "children"),
        Output("kpi-peak-dau", "children"),
        Output("kpi-sessions", "children"),
        Output("kpi-sessions-per-user", "children"),
        Output("dau-trend-graph", "figure"),
        Output("weekday-graph", "figure"),
        Output("feature-graph", "figure"),
        Output("debug-msg", "children"),
        Input("data-version", "data"),
        Input("date-range", "start_date"),
        Input("date-range", "end_date"),
        Input("feature-dd", "value"),
    )
    def update_viz(version, start_date, end_date, features):
        try:
            flt = Filters(start_date=start_date, end_date=end_date, features=features)
        except ValidationError as e:
            empty = _empty_fig()
            kpis = EMPTY_KPIS
            return (kpis["avg_dau"], kpis["peak_dau"], kpis["sessions"], kpis["sessions_per_user"],
                    empty, empty, empty, f"Invalid filters: {e.errors()[0]['msg']}")

        dau = fetch_frame(dau_query(flt))
        adoption = fetch_frame(feature_query(flt))
        kpis = summarize_dau(dau)
        trend_fig, weekday_fig, feature_fig = build_figures(dau, adoption)

        cached = len(get_client().cache)
        msg = f"Days: {len(dau)} | Cached tables: {cached} | Data version: {version or 0}"
        return (kpis["avg_dau"], kpis["peak_dau"], kpis["sessions"], kpis["sessions_per_user"],
                trend_fig, weekday_fig, feature_fig, msg)
