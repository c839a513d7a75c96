"""Admin/identity tables. Read-only in demo mode."""
from typing import List, Sequence

DEMO_ORG_ID = "org-demo"
DEMO_TEAM_ID = "team-demo"
CREATED_AT = "2025-01-01T00:00:00Z"


def generate_user_profiles(subscriptions: Sequence[dict]) -> List[dict]:
    """One profile per subscriber; the first is the super admin, the next two admins."""
    return [
        {
            "id": sub["user_id"],
            "email": sub["email"],
            "display_name": sub["user_name"],
            "role": "super_admin" if i == 0 else "admin" if i < 3 else "viewer",
            "is_active": True,
            "organization_id": DEMO_ORG_ID,
            "team_id": DEMO_TEAM_ID,
            "avatar_url": None,
            "created_at": CREATED_AT,
        }
        for i, sub in enumerate(subscriptions)
    ]


def generate_organizations() -> List[dict]:
    return [{"id": DEMO_ORG_ID, "name": "Lumist Demo", "created_at": CREATED_AT}]


def generate_teams() -> List[dict]:
    return [{"id": DEMO_TEAM_ID, "name": "Demo Team", "allowed_routes": ["*"], "organization_id": DEMO_ORG_ID}]


def generate_empty() -> List[dict]:
    return []
