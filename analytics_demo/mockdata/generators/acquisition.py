"""Signup funnel tables. All hand-authored monthly/segment rollups."""
from typing import List


def generate_monthly_conversion_stats() -> List[dict]:
    rows = [
        ("2025-01", 180, 5, 2.8, 18.2),
        ("2025-02", 220, 7, 3.2, 15.4),
        ("2025-03", 310, 12, 3.9, 11.8),
        ("2025-04", 280, 10, 3.6, 13.1),
        ("2025-05", 290, 11, 3.8, 10.5),
        ("2025-06", 220, 7, 3.2, 9.2),
    ]
    return [
        {
            "signup_month": month,
            "total_signups": signups,
            "total_conversions": conversions,
            "conversion_rate": rate,
            "avg_days_to_convert": days,
        }
        for month, signups, conversions, rate, days in rows
    ]


def generate_referral_source_performance() -> List[dict]:
    rows = [
        ("TikTok", 525, 27, 5.2),
        ("Facebook", 420, 13, 3.1),
        ("Google", 270, 8, 2.8),
        ("Word of Mouth", 180, 11, 6.1),
        ("Instagram", 105, 2, 2.2),
    ]
    return [
        {"referral_source": src, "total_users": users, "converted_users": conv, "conversion_rate": rate}
        for src, users, conv, rate in rows
    ]


def generate_geography_stats() -> List[dict]:
    return [
        {"geography": "Vietnam", "total_users": 1380, "converted_users": 48, "conversion_rate": 3.8, "total_revenue_usd": 4320},
        {"geography": "Global", "total_users": 120, "converted_users": 4, "conversion_rate": 2.1, "total_revenue_usd": 360},
        {"geography": "Not Converted", "total_users": 1448, "converted_users": 0, "conversion_rate": 0, "total_revenue_usd": 0},
    ]


def generate_signup_cohort_conversion() -> List[dict]:
    columns = (
        "cohort", "cohort_size", "total_converted", "conversion_rate",
        "converted_day_0", "converted_within_7d", "converted_within_30d", "converted_after_30d",
        "avg_days_to_convert", "vietnam_conversions", "global_conversions",
    )
    rows = [
        ("2025-01", 180, 5, 2.8, 1, 2, 3, 4, 18.2, 4, 1),
        ("2025-02", 220, 7, 3.2, 1, 3, 5, 6, 15.4, 6, 1),
        ("2025-03", 310, 12, 3.9, 2, 5, 9, 10, 11.8, 10, 2),
        ("2025-04", 280, 10, 3.6, 2, 4, 7, 9, 13.1, 8, 2),
        ("2025-05", 290, 11, 3.8, 2, 5, 8, 10, 10.5, 9, 2),
        ("2025-06", 220, 7, 3.2, 1, 3, 5, 6, 9.2, 6, 1),
    ]
    return [dict(zip(columns, row)) for row in rows]


def generate_top_referrers() -> List[dict]:
    rows = [
        ("Sarah Chen", "SARAH25", 45, 8, 17.8, 720),
        ("Michael Tran", "MIKE99", 38, 6, 15.8, 540),
        ("Emily Nguyen", "EMILY2025", 32, 5, 15.6, 450),
        ("David Lee", "DAVID", 28, 4, 14.3, 360),
        ("Jessica Wang", "JESSICA", 24, 3, 12.5, 270),
    ]
    return [
        {
            "referrer_id": f"ref-{i + 1}",
            "referrer_name": name,
            "referrer_email": name.lower().replace(" ", ".") + "@email.com",
            "referral_code": code,
            "total_referrals": total,
            "converted_referrals": converted,
            "conversion_rate": rate,
            "total_revenue_usd": revenue,
        }
        for i, (name, code, total, converted, rate, revenue) in enumerate(rows)
    ]
