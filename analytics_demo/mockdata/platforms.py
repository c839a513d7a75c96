"""Static social account configuration served without table queries."""
from typing import Dict, List, Optional

from ..config import Settings, get_settings
from ..utils import fixed_delay

DEMO_ACCOUNTS: Dict[str, List[dict]] = {
    "facebook": [{
        "id": "fb-demo-account",
        "account_name": "Lumist SAT Prep",
        "platform_account_id": "123456789",
        "profile_picture": None,
    }],
    "threads": [{
        "id": "th-demo-account",
        "account_name": "Lumist Threads",
        "platform_account_id": "987654321",
        "profile_picture": None,
    }],
    "instagram": [{
        "id": "ig-demo-account",
        "account_name": "Lumist Instagram",
        "platform_account_id": "111222333",
        "profile_picture": None,
    }],
    "tiktok": [{
        "id": "tt-demo-account",
        "account_name": "Lumist TikTok",
        "platform_account_id": "444555666",
        "profile_picture": None,
    }],
}

PLATFORM_CONFIG: Dict[str, dict] = {
    "facebook": {"name": "Facebook", "color": "#1877F2", "icon": "Facebook"},
    "threads": {"name": "Threads", "color": "#000000", "icon": "AtSign"},
    "instagram": {"name": "Instagram", "color": "#E4405F", "icon": "Instagram"},
    "tiktok": {"name": "TikTok", "color": "#000000", "icon": "Video"},
}


def primary_account(platform: str) -> dict:
    return DEMO_ACCOUNTS[platform][0]


def _account_map() -> Dict[str, object]:
    """Legacy single-account shape: ``{platform: id, f"{platform}_info": account}``."""
    out: Dict[str, object] = {}
    for platform, accounts in DEMO_ACCOUNTS.items():
        out[platform] = accounts[0]["id"]
        out[f"{platform}_info"] = dict(accounts[0])
    return out


async def fetch_platform_accounts(settings: Optional[Settings] = None) -> Dict[str, object]:
    await fixed_delay((settings or get_settings()).platform_latency_ms)
    return _account_map()


async def get_account_id(platform: str, settings: Optional[Settings] = None) -> Optional[str]:
    await fixed_delay((settings or get_settings()).platform_latency_ms)
    accounts = DEMO_ACCOUNTS.get(platform)
    return accounts[0]["id"] if accounts else None


async def get_account_info(platform: str, settings: Optional[Settings] = None) -> Optional[dict]:
    await fixed_delay((settings or get_settings()).platform_latency_ms)
    accounts = DEMO_ACCOUNTS.get(platform)
    return dict(accounts[0]) if accounts else None


async def get_accounts_for_platform(platform: str, settings: Optional[Settings] = None) -> List[dict]:
    await fixed_delay((settings or get_settings()).platform_latency_ms)
    return [dict(a) for a in DEMO_ACCOUNTS.get(platform, [])]


def clear_account_cache() -> None:
    """Nothing is cached; accounts are static."""
