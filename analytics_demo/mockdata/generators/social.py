import datetime as dt
from typing import Iterable, List, Sequence

import numpy as np
import pandas as pd

from ..platforms import DEMO_ACCOUNTS, primary_account
from ...utils import round_half_up
from ..sequence import seeded_int, seeded_random

SOCIAL_START = dt.date(2024, 12, 5)
SOCIAL_END = dt.date(2025, 6, 30)
LAST_POST_DAY = dt.date(2025, 6, 30)
# platform_post_id base: 2025-06-30T14:00:00Z in epoch milliseconds
POST_ID_BASE_MS = 1751292000000

_METRIC_PROFILES = {
    # follower line start/end over ~210 days, follower noise, per-platform seed space
    "facebook": {
        "followers": (2400, 8900), "noise": 50, "noise_seed": 0, "seed_base": 10000,
        "reach": (5000, 15000), "engagements": (150, 600), "follows": (5, 40), "page_views": (50, 200),
    },
    "threads": {
        "followers": (1200, 4500), "noise": 30, "noise_seed": 500, "seed_base": 20000,
        "reach": (2000, 8000), "engagements": (100, 400), "follows": (3, 25), "page_views": (30, 120),
    },
}


def social_days() -> pd.DatetimeIndex:
    return pd.date_range(SOCIAL_START, SOCIAL_END, freq="D")


def generate_social_accounts() -> List[dict]:
    return [
        {
            "id": primary_account(platform)["id"],
            "platform": platform,
            "platform_account_id": primary_account(platform)["platform_account_id"],
            "account_name": primary_account(platform)["account_name"],
            "profile_picture": "/logo-icon.png",
        }
        for platform in ("facebook", "threads", "instagram")
    ]


def generate_account_metrics(platform: str) -> List[dict]:
    """Daily page metrics; followers climb linearly with a little seeded noise."""
    p = _METRIC_PROFILES[platform]
    days = social_days()
    idx = np.arange(len(days))
    start, end = p["followers"]
    noise = p["noise"]
    followers = start + (end - start) / 210 * idx + (seeded_random(idx + p["noise_seed"]) * noise - noise / 2)
    seeds = idx + p["seed_base"]
    df = pd.DataFrame({
        "metric_date": days.strftime("%Y-%m-%d"),
        "account_id": primary_account(platform)["id"],
        "followers_count": np.floor(followers + 0.5).astype(int),
        "daily_follows": seeded_int(seeds + 1000, *p["follows"]),
        "reach": seeded_int(seeds + 2000, *p["reach"]),
        "engagements": seeded_int(seeds + 3000, *p["engagements"]),
        "page_views": seeded_int(seeds + 4000, *p["page_views"]),
    })
    return df.to_dict(orient="records")


POST_TYPES = ("study_tips", "meme", "success_story", "announcement", "motivation")
ENGAGEMENT_BOOST = {"meme": 1.5, "success_story": 1.3}
CAPTIONS = {
    "study_tips": (
        "5 tips to improve your SAT Reading score 📚",
        "The best time to study for SAT? Here's what research says ⏰",
        "How to tackle the hardest SAT Math problems 🧮",
    ),
    "meme": (
        "When you finally understand that one SAT grammar rule 😂",
        "SAT prep students at 2am be like... 💀",
        "Me explaining SAT strategies to my parents 🤓",
    ),
    "success_story": (
        "Congratulations to Minh Anh on scoring 1550! 🎉",
        "From 1200 to 1480 in 3 months - here's how 📈",
        "Our student just got accepted to MIT! 🏫",
    ),
    "announcement": (
        "New AI Tutor feature is now live! 🚀",
        "SAT March 2025 registration deadline reminder ⏰",
        "We just hit 5,000 active learners! 🎊",
    ),
    "motivation": (
        "Your SAT score doesn't define you, but your effort does 💪",
        "Every practice test gets you closer to your dream score ⭐",
        "Believe in yourself - you've got this! 🌟",
    ),
}


def generate_facebook_posts() -> List[dict]:
    account_id = DEMO_ACCOUNTS["facebook"][0]["id"]
    posts = []
    for i in range(50):
        day = LAST_POST_DAY - dt.timedelta(days=i * 4)
        post_type = POST_TYPES[i % len(POST_TYPES)]
        boost = ENGAGEMENT_BOOST.get(post_type, 1.0)
        seed = 30000 + i * 10

        def boosted(offset: int, low: int, high: int) -> int:
            return round_half_up(seeded_int(seed + offset, low, high) * boost)

        posts.append({
            "id": f"fb-post-{i + 1}",
            "account_id": account_id,
            "platform_post_id": str(POST_ID_BASE_MS - i * 100000),
            "content_text": CAPTIONS[post_type][i % 3],
            "post_type": post_type,
            "reach": seeded_int(seed, 3000, 12000),
            "clicks": boosted(1, 50, 200),
            "reactions_breakdown": {
                "like": boosted(2, 100, 400),
                "love": boosted(3, 20, 80),
                "haha": boosted(4, 5, 30),
                "wow": boosted(5, 2, 15),
                "sad": seeded_int(seed + 6, 0, 5),
                "angry": seeded_int(seed + 7, 0, 3),
            },
            "published_at": f"{day.isoformat()}T14:00:00Z",
            "permalink": f"https://facebook.com/lumist/posts/{i + 1}",
        })
    return posts


def generate_threads_posts() -> List[dict]:
    account_id = DEMO_ACCOUNTS["threads"][0]["id"]
    posts = []
    for i in range(30):
        day = LAST_POST_DAY - dt.timedelta(days=i * 6)
        seed = 40000 + i * 10
        posts.append({
            "id": f"th-post-{i + 1}",
            "account_id": account_id,
            "platform_post_id": f"th-{POST_ID_BASE_MS - i * 100000}",
            "content_text": (
                f"SAT prep tip #{i + 1}: Focus on understanding concepts, not just memorizing answers. "
                "📚 #SATPrep #StudyTips"
            ),
            "reach": seeded_int(seed, 1500, 6000),
            "clicks": seeded_int(seed + 1, 20, 100),
            "reactions_breakdown": {
                "like": seeded_int(seed + 2, 50, 200),
                "love": seeded_int(seed + 3, 10, 50),
                "haha": seeded_int(seed + 4, 2, 15),
            },
            "published_at": f"{day.isoformat()}T10:00:00Z",
            "permalink": f"https://threads.net/lumist/post/{i + 1}",
        })
    return posts


def concat_tables(*tables: Iterable[dict]) -> List[dict]:
    return [row for table in tables for row in table]


def generate_post_metrics(posts: Sequence[dict]) -> List[dict]:
    """One metrics row per post, dated on its publish day."""
    return [
        {
            "post_id": post["id"],
            "metric_date": post["published_at"][:10],
            "reach": post["reach"],
            "clicks": post["clicks"],
            "reactions_breakdown": dict(post["reactions_breakdown"]),
        }
        for post in posts
    ]


def generate_demographics() -> List[dict]:
    return [{
        "age_groups": [
            {"range": "13-17", "percentage": 45},
            {"range": "18-24", "percentage": 35},
            {"range": "25-34", "percentage": 12},
            {"range": "35-44", "percentage": 5},
            {"range": "45+", "percentage": 3},
        ],
        "gender": [
            {"type": "female", "percentage": 58},
            {"type": "male", "percentage": 40},
            {"type": "other", "percentage": 2},
        ],
        "countries": [
            {"country": "Vietnam", "percentage": 82},
            {"country": "United States", "percentage": 8},
            {"country": "Singapore", "percentage": 4},
            {"country": "Australia", "percentage": 3},
            {"country": "Other", "percentage": 3},
        ],
        "cities": [
            {"city": "Ho Chi Minh City", "percentage": 42},
            {"city": "Hanoi", "percentage": 28},
            {"city": "Da Nang", "percentage": 8},
            {"city": "Hai Phong", "percentage": 5},
            {"city": "Other", "percentage": 17},
        ],
    }]


def generate_daily_metrics_summary(platform: str) -> List[dict]:
    days = social_days()
    idx = np.arange(len(days))
    seeds = idx + (50000 if platform == "facebook" else 60000)
    followers = 2400 + idx * 31 + (seeded_random(idx) * 100 - 50)
    df = pd.DataFrame({
        "date": days.strftime("%Y-%m-%d"),
        "platform_id": primary_account(platform)["platform_account_id"],
        "platform": platform,
        "followers": np.floor(followers + 0.5).astype(int),
        "reach": seeded_int(seeds + 1000, 3000, 12000),
        "impressions": seeded_int(seeds + 2000, 5000, 18000),
        "engagement": seeded_int(seeds + 3000, 200, 800),
        "profile_views": seeded_int(seeds + 4000, 50, 200),
    })
    return df.to_dict(orient="records")
