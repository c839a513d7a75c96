import asyncio
import datetime as dt

import pytest

from analytics_demo.mockdata import GenerationCache, GeneratorError, MockClient, TableRegistry, TableSpec


@pytest.mark.asyncio
async def test_seven_day_window_of_dau(client):
    result = await (
        client.from_("dau").select("*")
        .gte("activity_date", "2025-03-01").lte("activity_date", "2025-03-07")
        .order("activity_date", ascending=True)
        .execute()
    )
    assert result.error is None
    assert len(result.data) == 7
    dates = [row["activity_date"] for row in result.data]
    assert dates == sorted(dates)
    assert all(isinstance(row["active_users"], int) and row["active_users"] > 0 for row in result.data)


@pytest.mark.asyncio
async def test_same_cache_gives_identical_results(client):
    first = await client.from_("unified_transactions").select("*").execute()
    second = await client.table("unified_transactions").select("*").execute()
    assert first.data == second.data


@pytest.mark.asyncio
async def test_fresh_caches_give_identical_results(settings):
    a = MockClient(settings=settings, cache=GenerationCache())
    b = MockClient(settings=settings, cache=GenerationCache())
    assert (await a.from_("dau").execute()).data == (await b.from_("dau").execute()).data


@pytest.mark.asyncio
async def test_generator_runs_once_until_cleared(settings):
    calls = []

    def gen():
        calls.append(1)
        return [{"a": 1}]

    client = MockClient(settings=settings, registry=TableRegistry([TableSpec("t", gen)]))
    await client.from_("t").execute()
    await client.from_("t").eq("a", 1).execute()
    assert len(calls) == 1
    client.clear_cache()
    await client.from_("t").execute()
    assert len(calls) == 2


@pytest.mark.asyncio
async def test_unknown_table_resolves_empty(client):
    result = await client.from_("does_not_exist").select("*").execute()
    assert result.data == []
    assert result.error is None


@pytest.mark.asyncio
async def test_schema_scope_reads_same_tables(client):
    scoped = await client.schema("identity").from_("user_profiles").select("*").execute()
    direct = await client.from_("user_profiles").select("*").execute()
    assert scoped.data == direct.data
    assert len(scoped.data) == 30


@pytest.mark.asyncio
async def test_rpc(client):
    routes = await client.rpc("get_allowed_routes")
    assert routes.data == ["*"]
    assert routes.error is None
    assert (await client.rpc("log_activity", {"action": "view"})).data is None
    assert (await client.rpc("anything_else")).data is None


@pytest.mark.asyncio
async def test_functions_invoke(client):
    insights = await client.functions.invoke("generate-insights", {"mode": "retention"})
    assert insights.data["cached"] is True
    assert len(insights.data["insights"]) == 4
    seats = await client.functions.invoke("get-sat-seats")
    assert seats.data["centers"] == []
    unknown = await client.functions.invoke("nope")
    assert unknown.data is None and unknown.error is None


@pytest.mark.asyncio
async def test_dau_window_with_date_objects(client):
    result = await (
        client.from_("dau").select("*")
        .gte("activity_date", dt.date(2025, 3, 1)).lte("activity_date", dt.date(2025, 3, 7))
        .order("activity_date")
        .execute()
    )
    assert result.error is None
    assert result.data[0]["activity_date"] == "2025-03-01"
    assert len(result.data) == 7


@pytest.mark.asyncio
async def test_functions_invoke_tolerates_odd_bodies(client):
    engagement = await client.functions.invoke("generate-insights", {"mode": "engagement"})
    for body in ("engagement", {"mode": ["retention"]}, {"mode": ""}, ["x"]):
        result = await client.functions.invoke("generate-insights", body)
        assert result.error is None
        assert result.data["insights"] == engagement.data["insights"]


@pytest.mark.asyncio
async def test_auth_surface(client):
    session = await client.auth.get_session()
    assert session.data["session"]["user"]["id"] == client.settings.demo_user_id
    user = await client.auth.get_user()
    assert user.data["user"]["email"] == client.settings.demo_user_email
    assert (await client.auth.sign_out()).error is None
    assert (await client.auth.sign_in_with_oauth("google")).error is None


@pytest.mark.asyncio
async def test_auth_state_callback_fires_once(client):
    events = []
    sub = client.auth.on_auth_state_change(lambda event, session: events.append((event, session)))
    await asyncio.sleep(0.01)
    assert [e for e, _ in events] == ["INITIAL_SESSION"]
    sub.unsubscribe()
    assert not sub.active


@pytest.mark.asyncio
async def test_auth_state_callback_can_be_cancelled(settings):
    delayed = settings.model_copy(update={"auth_callback_delay_ms": 50})
    client = MockClient(settings=delayed)
    events = []
    client.auth.on_auth_state_change(lambda event, session: events.append(event)).unsubscribe()
    await asyncio.sleep(0.08)
    assert events == []


def test_auth_state_callback_without_loop(client):
    events = []
    client.auth.on_auth_state_change(lambda event, session: events.append(event))
    assert events == ["INITIAL_SESSION"]


@pytest.mark.asyncio
async def test_storage_stub(client):
    bucket = client.storage.from_("avatars")
    assert (await bucket.upload("me.png", b"...")).error is None
    assert bucket.get_public_url("me.png") == {"data": {"publicUrl": ""}}


def test_invalid_generator_raises_when_table_is_opened(settings):
    registry = TableRegistry([TableSpec("bad", lambda: 1 / 0)])
    client = MockClient(settings=settings, registry=registry)
    with pytest.raises(GeneratorError):
        client.from_("bad")
