from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import partial
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Type

from pydantic import ValidationError

from . import generators as g
from . import records as r
from .cache import CircularDependencyError, GenerationCache, GeneratorError, Snapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TableSpec:
    """How to build one logical table.

    ``generate`` receives the snapshots of ``depends_on`` positionally, in
    declaration order. Rows are validated against ``model`` when one is set.
    """

    name: str
    generate: Callable[..., Iterable[Mapping]]
    model: Optional[Type[r.Record]] = None
    depends_on: Tuple[str, ...] = ()
    aliases: Tuple[str, ...] = ()


class TableRegistry:
    """Maps table names (and aliases) to specs and builds cached snapshots."""

    def __init__(self, specs: Iterable[TableSpec] = ()) -> None:
        self._specs: Dict[str, TableSpec] = {}
        self._aliases: Dict[str, str] = {}
        for spec in specs:
            self.register(spec)

    # ---- Registration ----
    def register(self, spec: TableSpec) -> None:
        for name in (spec.name, *spec.aliases):
            if name in self._specs or name in self._aliases:
                raise ValueError(f"Table name '{name}' is already registered")
        self._specs[spec.name] = spec
        for alias in spec.aliases:
            self._aliases[alias] = spec.name

    def resolve(self, name: str) -> Optional[TableSpec]:
        return self._specs.get(self._aliases.get(name, name))

    def names(self) -> List[str]:
        return sorted([*self._specs, *self._aliases])

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.resolve(name) is not None

    def check(self) -> None:
        """Fail fast on unknown or circular dependencies between specs."""
        for spec in self._specs.values():
            for dep in spec.depends_on:
                if self.resolve(dep) is None:
                    raise GeneratorError(f"'{spec.name}' depends on unknown table '{dep}'")

        done: set = set()

        def visit(name: str, path: Tuple[str, ...]) -> None:
            if name in path:
                raise CircularDependencyError(" -> ".join((*path, name)))
            if name in done:
                return
            for dep in self._specs[name].depends_on:
                visit(self.resolve(dep).name, (*path, name))
            done.add(name)

        for name in self._specs:
            visit(name, ())

    # ---- Snapshots ----
    def snapshot(self, name: str, cache: GenerationCache) -> Snapshot:
        """Cached rows for ``name``; unknown tables yield an empty snapshot."""
        spec = self.resolve(name)
        if spec is None:
            logger.warning("Unknown table '%s'; returning no rows", name)
            return ()
        return cache.get_or_generate(spec.name, lambda: self._build(spec, cache))

    def _build(self, spec: TableSpec, cache: GenerationCache) -> List[dict]:
        deps = []
        for dep in spec.depends_on:
            if self.resolve(dep) is None:
                raise GeneratorError(f"'{spec.name}' depends on unknown table '{dep}'")
            deps.append(self.snapshot(dep, cache))

        try:
            rows = list(spec.generate(*deps))
        except GeneratorError:
            raise
        except Exception as e:  # noqa: BLE001
            raise GeneratorError(f"Generator for '{spec.name}' failed: {e}") from e

        if spec.model is None:
            return [dict(row) for row in rows]
        try:
            return [spec.model.model_validate(row).model_dump() for row in rows]
        except ValidationError as e:
            raise GeneratorError(f"Generator for '{spec.name}' produced an invalid row: {e}") from e


def default_specs() -> List[TableSpec]:
    return [
        # ---- Engagement ----
        TableSpec("dau", g.generate_dau, r.DailyActiveUsers),
        TableSpec("monthly_active_users", g.generate_mau, r.MonthlyActiveUsers),
        TableSpec("monthly_cohort_retention", g.generate_retention_cohorts, r.CohortRetention),
        TableSpec("retention_summary", g.generate_retention_summary, r.RetentionSummary),
        TableSpec("weekly_calendar_retention", g.generate_weekly_retention, r.WeeklyRetention),
        TableSpec("daily_feature_adoption", g.generate_feature_adoption, r.FeatureAdoption, depends_on=("dau",)),
        TableSpec("daily_feature_usage", g.generate_feature_usage, r.FeatureUsage),
        TableSpec("sat_cycle_engagement", g.generate_exam_cycle_engagement, r.ExamCycleEngagement),
        TableSpec("attempt_durations", g.generate_attempt_durations, r.AttemptDuration),
        # ---- Acquisition ----
        TableSpec("monthly_conversion_stats", g.generate_monthly_conversion_stats, r.ConversionStats,
                  aliases=("weekly_conversion_stats",)),
        TableSpec("referral_source_performance", g.generate_referral_source_performance, r.ReferralSourcePerformance),
        TableSpec("geography_conversion_stats", g.generate_geography_stats, r.GeographyConversion),
        TableSpec("signup_cohort_conversion", g.generate_signup_cohort_conversion, r.SignupCohortConversion),
        TableSpec("referral_code_performance", g.generate_top_referrers, r.ReferralCodePerformance),
        # ---- Revenue ----
        TableSpec("monthly_revenue_summary", g.generate_monthly_revenue, r.MonthlyRevenue,
                  aliases=("monthly_revenue",)),
        TableSpec("churn_summary", g.generate_churn_summary, r.ChurnSummary),
        TableSpec("user_subscriptions", g.generate_user_subscriptions, r.Subscription),
        TableSpec("unified_transactions", g.generate_transactions, r.Transaction),
        TableSpec("daily_exchange_rates", g.generate_exchange_rates, r.ExchangeRate),
        TableSpec("ai_insights_cache", g.generate_empty),
        # ---- Social ----
        TableSpec("social_accounts", g.generate_social_accounts, r.SocialAccount),
        TableSpec("facebook_account_metrics", partial(g.generate_account_metrics, "facebook"), r.AccountMetrics),
        TableSpec("threads_account_metrics", partial(g.generate_account_metrics, "threads"), r.AccountMetrics),
        TableSpec("account_metrics_daily", g.concat_tables, r.AccountMetrics,
                  depends_on=("facebook_account_metrics", "threads_account_metrics")),
        TableSpec("facebook_posts", g.generate_facebook_posts, r.Post),
        TableSpec("threads_posts", g.generate_threads_posts, r.Post),
        TableSpec("posts", g.concat_tables, r.Post, depends_on=("facebook_posts", "threads_posts")),
        TableSpec("post_metrics_daily", g.generate_post_metrics, r.PostMetrics, depends_on=("posts",)),
        TableSpec("demographic_metrics_daily", g.generate_demographics, r.Demographics),
        TableSpec("facebook_daily_metrics_summary", partial(g.generate_daily_metrics_summary, "facebook"),
                  r.DailyMetricsSummary),
        TableSpec("threads_daily_metrics_summary", partial(g.generate_daily_metrics_summary, "threads"),
                  r.DailyMetricsSummary),
        TableSpec("daily_metrics_summary", g.concat_tables, r.DailyMetricsSummary,
                  depends_on=("facebook_daily_metrics_summary", "threads_daily_metrics_summary")),
        # ---- Identity ----
        TableSpec("user_profiles", g.generate_user_profiles, r.UserProfile, depends_on=("user_subscriptions",)),
        TableSpec("organizations", g.generate_organizations, r.Organization),
        TableSpec("teams", g.generate_teams, r.Team),
        TableSpec("user_invites", g.generate_empty),
        TableSpec("login_logs", g.generate_empty),
        TableSpec("activity_logs", g.generate_empty),
        TableSpec("notification_settings", g.generate_empty),
        TableSpec("notification_logs", g.generate_empty),
    ]


def default_registry() -> TableRegistry:
    registry = TableRegistry(default_specs())
    registry.check()
    return registry
