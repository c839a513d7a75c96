"""Row models, one per logical table.

Generators emit plain dicts; the registry validates each row against the
table's model before it is cached.
"""
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict


class Record(BaseModel):
    """Base row: unknown fields and NaN/inf values are generator bugs."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)


# ---- Engagement ----
class DailyActiveUsers(Record):
    activity_date: str
    active_users: int
    sessions: int


class MonthlyActiveUsers(Record):
    month_start: str
    mau: int


class CohortRetention(Record):
    cohort_month: str
    cohort_size: int
    week_number: int
    retention_rate: float  # percent, 45 means 45%
    retained_users: int


class RetentionSummary(Record):
    total_users: int
    d1_retention: float
    d1_eligible_users: int
    d7_retention: float
    d7_eligible_users: int
    d30_retention: float
    d30_eligible_users: int
    avg_sessions_per_user: float


class WeeklyRetention(Record):
    week_start: str
    retention_rate: float  # fraction
    active_users: int
    returning_users: int


class FeatureAdoption(Record):
    usage_date: str
    feature_type: str
    unique_users: int
    total_usage: int


class FeatureUsage(Record):
    feature_type: str
    total_usage: int
    unique_users: int


class ExamCycleEngagement(Record):
    days_until_sat: str
    avg_dau: int
    engagement_multiplier: float
    label: str


class AttemptDuration(Record):
    min_minutes: int
    max_minutes: int
    label: str
    count: int


# ---- Acquisition ----
class ConversionStats(Record):
    signup_month: str
    total_signups: int
    total_conversions: int
    conversion_rate: float
    avg_days_to_convert: float


class ReferralSourcePerformance(Record):
    referral_source: str
    total_users: int
    converted_users: int
    conversion_rate: float


class GeographyConversion(Record):
    geography: str
    total_users: int
    converted_users: int
    conversion_rate: float
    total_revenue_usd: float


class SignupCohortConversion(Record):
    cohort: str
    cohort_size: int
    total_converted: int
    conversion_rate: float
    converted_day_0: int
    converted_within_7d: int
    converted_within_30d: int
    converted_after_30d: int
    avg_days_to_convert: float
    vietnam_conversions: int
    global_conversions: int


class ReferralCodePerformance(Record):
    referrer_id: str
    referrer_name: str
    referrer_email: str
    referral_code: str
    total_referrals: int
    converted_referrals: int
    conversion_rate: float
    total_revenue_usd: float


# ---- Revenue ----
class MonthlyRevenue(Record):
    month: str
    net_revenue: float
    transaction_count: int
    unique_customers: int


class ChurnSummary(Record):
    total_subscribers: int
    active_subscribers: int
    churned_subscribers: int
    churn_rate_percent: float
    expiring_7_days: int
    expiring_30_days: int


class Subscription(Record):
    id: str
    user_id: str
    user_name: str
    email: str
    plan_name: str
    plan_price: float
    status: Literal["active", "expiring_soon", "at_risk", "expired"]
    start_date: str
    end_date: Optional[str] = None
    last_active: str


class Transaction(Record):
    id: str
    transaction_id: str
    user_id: str
    email: str
    amount: float
    currency: Literal["USD", "VND"]
    payment_provider: str
    subscription_plan: str
    status: Literal["success", "pending", "failed"]
    transaction_date: str
    created_at: str
    processing_seconds: int


class ExchangeRate(Record):
    date: str
    usd_to_vnd: float
    source: str


# ---- Social ----
class SocialAccount(Record):
    id: str
    platform: str
    platform_account_id: str
    account_name: str
    profile_picture: Optional[str] = None


class AccountMetrics(Record):
    metric_date: str
    account_id: str
    followers_count: int
    daily_follows: int
    reach: int
    engagements: int
    page_views: int


class Post(Record):
    id: str
    account_id: str
    platform_post_id: str
    content_text: str
    post_type: Optional[str] = None
    reach: int
    clicks: int
    reactions_breakdown: Dict[str, int]
    published_at: str
    permalink: str


class PostMetrics(Record):
    post_id: str
    metric_date: str
    reach: int
    clicks: int
    reactions_breakdown: Dict[str, int]


class Demographics(Record):
    age_groups: List[Dict[str, Any]]
    gender: List[Dict[str, Any]]
    countries: List[Dict[str, Any]]
    cities: List[Dict[str, Any]]


class DailyMetricsSummary(Record):
    date: str
    platform_id: str
    platform: str
    followers: int
    reach: int
    impressions: int
    engagement: int
    profile_views: int


# ---- Identity ----
class UserProfile(Record):
    id: str
    email: str
    display_name: str
    role: Literal["super_admin", "admin", "viewer"]
    is_active: bool
    organization_id: str
    team_id: str
    avatar_url: Optional[str] = None
    created_at: str


class Organization(Record):
    id: str
    name: str
    created_at: str


class Team(Record):
    id: str
    name: str
    allowed_routes: List[str]
    organization_id: str
