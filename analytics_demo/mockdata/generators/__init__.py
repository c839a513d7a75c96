"""Table generators grouped by dashboard area.

Each generator returns a freshly built list of row dicts. Generators that
derive from another table take that table's cached snapshot as an argument;
the registry declares and supplies those dependencies.
"""
from .activity import (
    generate_attempt_durations,
    generate_dau,
    generate_exam_cycle_engagement,
    generate_feature_adoption,
    generate_feature_usage,
    generate_mau,
    generate_retention_cohorts,
    generate_retention_summary,
    generate_weekly_retention,
)
from .acquisition import (
    generate_geography_stats,
    generate_monthly_conversion_stats,
    generate_referral_source_performance,
    generate_signup_cohort_conversion,
    generate_top_referrers,
)
from .identity import generate_empty, generate_organizations, generate_teams, generate_user_profiles
from .insights import generate_insights
from .revenue import (
    generate_churn_summary,
    generate_exchange_rates,
    generate_monthly_revenue,
    generate_transactions,
    generate_user_subscriptions,
)
from .social import (
    concat_tables,
    generate_account_metrics,
    generate_daily_metrics_summary,
    generate_demographics,
    generate_facebook_posts,
    generate_post_metrics,
    generate_social_accounts,
    generate_threads_posts,
)

__all__ = [
    "generate_attempt_durations",
    "generate_dau",
    "generate_exam_cycle_engagement",
    "generate_feature_adoption",
    "generate_feature_usage",
    "generate_mau",
    "generate_retention_cohorts",
    "generate_retention_summary",
    "generate_weekly_retention",
    "generate_geography_stats",
    "generate_monthly_conversion_stats",
    "generate_referral_source_performance",
    "generate_signup_cohort_conversion",
    "generate_top_referrers",
    "generate_empty",
    "generate_organizations",
    "generate_teams",
    "generate_user_profiles",
    "generate_insights",
    "generate_churn_summary",
    "generate_exchange_rates",
    "generate_monthly_revenue",
    "generate_transactions",
    "generate_user_subscriptions",
    "concat_tables",
    "generate_account_metrics",
    "generate_daily_metrics_summary",
    "generate_demographics",
    "generate_facebook_posts",
    "generate_post_metrics",
    "generate_social_accounts",
    "generate_threads_posts",
]
