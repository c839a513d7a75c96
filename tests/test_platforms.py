import pytest

from analytics_demo.mockdata import platforms


@pytest.mark.asyncio
async def test_account_map_has_ids_and_info(settings):
    accounts = await platforms.fetch_platform_accounts(settings)
    assert accounts["facebook"] == "fb-demo-account"
    assert accounts["threads_info"]["platform_account_id"] == "987654321"
    assert set(k for k in accounts if not k.endswith("_info")) == {"facebook", "threads", "instagram", "tiktok"}


@pytest.mark.asyncio
async def test_single_account_lookups(settings):
    assert await platforms.get_account_id("tiktok", settings) == "tt-demo-account"
    assert await platforms.get_account_id("myspace", settings) is None
    info = await platforms.get_account_info("instagram", settings)
    assert info["account_name"] == "Lumist Instagram"
    assert await platforms.get_account_info("myspace", settings) is None


@pytest.mark.asyncio
async def test_accounts_for_platform_are_copies(settings):
    accounts = await platforms.get_accounts_for_platform("facebook", settings)
    accounts[0]["account_name"] = "changed"
    assert platforms.primary_account("facebook")["account_name"] == "Lumist SAT Prep"
    assert await platforms.get_accounts_for_platform("myspace", settings) == []


def test_clear_account_cache_is_harmless():
    platforms.clear_account_cache()
    assert platforms.PLATFORM_CONFIG["facebook"]["color"] == "#1877F2"
