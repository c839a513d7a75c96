from analytics_demo import data


def test_schema_clients_share_one_cache():
    data.clear_cache()
    data.fetch(data.get_client("identity").from_("user_profiles").select("*"))
    assert "user_subscriptions" in data.analytics.cache
    assert data.get_client("social_analytics").cache is data.analytics.cache
    assert data.get_client("nope") is data.analytics


def test_fetch_resolves_builders_and_coroutines():
    result = data.fetch(data.analytics.from_("teams").select("*"))
    assert result.data[0]["allowed_routes"] == ["*"]
    routes = data.fetch(data.analytics.rpc("get_allowed_routes"))
    assert routes.data == ["*"]


def test_fetch_frame():
    frame = data.fetch_frame(data.analytics.from_("dau").select("*").limit(5))
    assert list(frame.columns) == ["activity_date", "active_users", "sessions"]
    assert len(frame) == 5
    single = data.fetch_frame(data.analytics.from_("churn_summary").select("*").single())
    assert len(single) == 1
    assert data.fetch_frame(data.analytics.from_("user_invites").select("*")).empty


def test_clear_cache_empties_shared_cache():
    data.fetch(data.analytics.from_("dau").select("*"))
    data.clear_cache()
    assert len(data.analytics.cache) == 0
