import datetime as dt
from typing import List

from ..sequence import seeded_choice, seeded_int, seeded_random

VND_PER_USD = 25000


def generate_monthly_revenue() -> List[dict]:
    rows = [
        ("2025-06", 2340, 8, 8),
        ("2025-05", 1890, 8, 7),
        ("2025-04", 1350, 5, 5),
        ("2025-03", 1080, 5, 4),
        ("2025-02", 720, 3, 3),
        ("2025-01", 450, 5, 5),
    ]
    return [
        {"month": month, "net_revenue": revenue, "transaction_count": txns, "unique_customers": customers}
        for month, revenue, txns, customers in rows
    ]


def generate_churn_summary() -> List[dict]:
    return [{
        "total_subscribers": 32,
        "active_subscribers": 26,
        "churned_subscribers": 6,
        "churn_rate_percent": 18.8,
        "expiring_7_days": 2,
        "expiring_30_days": 5,
    }]


PLANS = (("Basic", 49), ("Premium", 99), ("Family", 149))
SUBSCRIPTION_STATUSES = ("active", "active", "active", "active", "expiring_soon", "at_risk", "expired")
FIRST_NAMES = ("Sarah", "Michael", "Emily", "David", "Jessica", "James", "Lisa", "Robert", "Jennifer", "William")
LAST_NAMES = ("Chen", "Tran", "Nguyen", "Lee", "Wang", "Kim", "Park", "Liu", "Zhang", "Huang")


def generate_user_subscriptions() -> List[dict]:
    rows = []
    for i in range(30):
        plan_name, price = PLANS[0 if i < 12 else 1 if i < 25 else 2]
        status = seeded_choice(i, SUBSCRIPTION_STATUSES)
        start_month = seeded_int(i + 100, 1, 5)
        rows.append({
            "id": f"sub-{i + 1}",
            "user_id": f"user-{i + 1}",
            "user_name": f"{FIRST_NAMES[i % 10]} {LAST_NAMES[(i // 10) % 10]}",
            "email": f"user{i + 1}@example.com",
            "plan_name": plan_name,
            "plan_price": price,
            "status": status,
            "start_date": f"2025-{start_month:02d}-01",
            "end_date": f"2025-{start_month + 1:02d}-01" if status == "expired" else None,
            "last_active": f"2025-06-{seeded_int(i + 200, 1, 20):02d}",
        })
    return rows


PROVIDERS = ("stripe", "vnpay", "zalopay")
TXN_PLANS = (("1month", 49), ("3months", 99), ("6months", 149), ("lifetime", 299))
CUSTOMER_NAMES = (
    "Minh Hoang", "Linh Tran", "Duc Pham", "Anh Le", "Hoa Nguyen",
    "Khoa Vo", "Mai Ly", "Tuan Dinh", "Thao Bui", "Nam Do",
    "Lan Dang", "Hung Trinh", "Chi Ha", "Long Hoang", "Vy Lam",
    "Quang Phan", "Nhung Truong", "Duy Ngo", "Thu Duong", "Hieu Vu",
    "My Le", "Khanh Tran", "An Nguyen", "Trung Pham", "Ngoc Do",
    "Phong Bui", "Tam Vo", "Hanh Ly", "Son Dinh", "Uyen Dang",
)


def _base36(n: int) -> str:
    digits = "0123456789abcdefghijklmnopqrstuvwxyz"
    out = ""
    while True:
        n, r = divmod(n, 36)
        out = digits[r] + out
        if n == 0:
            return out


def _transaction_id(provider: str, i: int, created: dt.datetime) -> str:
    epoch_ms = int(created.timestamp() * 1000)
    if provider == "stripe":
        return f"pi_{_base36(epoch_ms)}{_base36(i).rjust(4, '0')}"
    if provider == "vnpay":
        return f"VNP{created:%Y%m%d}{i + 1000:06d}"
    return f"ZLP{str(epoch_ms)[-10:]}{i:04d}"


def generate_transactions() -> List[dict]:
    """Sixty payments, one every three days; local wallets settle in VND."""
    start = dt.date(2025, 1, 1)
    rows = []
    for i in range(60):
        day = start + dt.timedelta(days=i * 3)
        created = dt.datetime(day.year, day.month, day.day, 10 + i % 12, 30, tzinfo=dt.timezone.utc)
        provider = seeded_choice(i, PROVIDERS)
        local = provider in ("vnpay", "zalopay")
        plan, usd = seeded_choice(i + 25, TXN_PLANS)
        name = CUSTOMER_NAMES[i % len(CUSTOMER_NAMES)]
        rows.append({
            "id": f"txn-{i + 1}",
            "transaction_id": _transaction_id(provider, i, created),
            "user_id": name,
            "email": name.lower().replace(" ", ".") + "@email.com",
            "amount": usd * VND_PER_USD if local else usd,
            "currency": "VND" if local else "USD",
            "payment_provider": provider,
            "subscription_plan": plan,
            "status": "success" if i < 52 else "pending" if i < 57 else "failed",
            "transaction_date": day.isoformat(),
            "created_at": created.strftime("%Y-%m-%dT%H:%M:%SZ"),
            "processing_seconds": int(seeded_random(i + 50) * 10) + 2,
        })
    return rows


def generate_exchange_rates() -> List[dict]:
    return [{"date": "2025-06-30", "usd_to_vnd": VND_PER_USD, "source": "mock"}]
