from typing import Optional
from dash import dcc, html

from .config import get_settings
from .data import analytics, fetch
from .mockdata.generators.activity import ACTIVITY_END, ACTIVITY_START, FEATURES


class UIBuilder:
    """Class that encapsulates layout building logic."""

    def __init__(self, title: Optional[str] = None) -> None:
        self.title = title or get_settings().app_title

    @staticmethod
    def kpi_card(label, value, id_suffix):
        return html.Div(
            className="kpi-card",
            children=[
                html.Div(label, className="kpi-label"),
                html.Div(value, className="kpi-value", id=f"kpi-{id_suffix}")
            ],
            style={
                "border": "1px solid #e0e0e0",
                "borderRadius": "8px",
                "padding": "12px 16px",
                "minWidth": "160px",
                "boxShadow": "0 1px 2px rgba(0,0,0,0.04)",
                "background": "white",
            }
        )

    @staticmethod
    def insight_items():
        result = fetch(analytics.functions.invoke("generate-insights", {"mode": "engagement"}))
        insights = (result.data or {}).get("insights", [])
        return [
            html.Li([html.Strong(f"{item['emoji']} {item['title']}"), html.Span(f" {item['content']}")])
            for item in insights
        ]

    def build_layout(self):
        session = fetch(analytics.auth.get_session()).data["session"]
        user_name = session["user"]["user_metadata"]["full_name"]
        features = [name for name, _, _ in FEATURES]

        return html.Div([
            dcc.Store(id="session-store", data={"user": session["user"], "expires_at": session["expires_at"]}),
            dcc.Store(id="data-version", data=0),

            html.Div([
                html.H2(self.title, style={"margin": "0"}),
                html.Div(f"Welcome, {user_name} (demo mode)", style={"color": "#666"}),
            ], style={"display": "flex", "flexDirection": "column", "gap": "4px", "marginBottom": "12px"}),

            # ==== Controls ====
            html.Div([
                dcc.DatePickerRange(
                    id="date-range",
                    min_date_allowed=ACTIVITY_START,
                    max_date_allowed=ACTIVITY_END,
                    start_date=ACTIVITY_END.replace(day=1),
                    end_date=ACTIVITY_END,
                    display_format="YYYY-MM-DD",
                ),
                dcc.Dropdown(features, features[:3], id="feature-dd", placeholder="Select features", multi=True,
                             style={"minWidth": "220px"}),
                html.Button("Regenerate Data", id="regenerate-btn", n_clicks=0),
            ], style={"display": "grid", "gridTemplateColumns": "repeat(3, minmax(220px, 1fr))", "gap": "10px",
                      "alignItems": "center"}),

            html.Hr(),

            html.Div(
                id="kpi-row",
                children=[
                    UIBuilder.kpi_card("Avg Daily Active Users", "-", "avg-dau"),
                    UIBuilder.kpi_card("Peak DAU", "-", "peak-dau"),
                    UIBuilder.kpi_card("Total Sessions", "-", "sessions"),
                    UIBuilder.kpi_card("Sessions per User", "-", "sessions-per-user"),
                ],
                style={"display": "flex", "gap": "12px", "flexWrap": "wrap", "marginBottom": "8px"}
            ),

            dcc.Graph(id="dau-trend-graph"),
            dcc.Graph(id="weekday-graph"),
            dcc.Graph(id="feature-graph"),

            html.H4("Insights"),
            html.Ul(UIBuilder.insight_items(), id="insights-list"),

            html.Div(id="debug-msg", style={"fontSize": "12px", "color": "#999", "marginTop": "6px"}),
        ])


def serve_layout():
    return UIBuilder().build_layout()
