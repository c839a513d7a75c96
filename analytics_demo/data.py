import asyncio
from typing import Awaitable, Union

import pandas as pd

from .config import get_settings
from .mockdata import GenerationCache, MockClient, QueryBuilder, QueryResult

# One generation cache shared by every schema client, so identity and
# analytics reads see the same generated rows.
_cache = GenerationCache()

analytics = MockClient(settings=get_settings(), cache=_cache, schema="public_analytics")
identity = MockClient(settings=get_settings(), cache=_cache, schema="identity")
social_analytics = MockClient(settings=get_settings(), cache=_cache, schema="social_analytics")

_CLIENTS = {
    "public_analytics": analytics,
    "identity": identity,
    "social_analytics": social_analytics,
}


def get_client(schema: str = "public_analytics") -> MockClient:
    """Client bound to ``schema``; unknown schemas fall back to analytics."""
    return _CLIENTS.get(schema, analytics)


def clear_cache() -> None:
    """Drop every generated snapshot; the next read regenerates."""
    _cache.clear()


def fetch(request: Union[QueryBuilder, Awaitable[QueryResult]]) -> QueryResult:
    """Resolve a builder (or any envelope coroutine) from synchronous code.

    Used by Dash callbacks, which run on Flask worker threads without an
    event loop of their own.
    """
    if isinstance(request, QueryBuilder):
        return asyncio.run(request.execute())

    async def _await():
        return await request

    return asyncio.run(_await())


def fetch_frame(request: Union[QueryBuilder, Awaitable[QueryResult]]) -> pd.DataFrame:
    """Like `fetch`, but returns the rows as a DataFrame (empty on error)."""
    result = fetch(request)
    if result.error is not None or not result.data:
        return pd.DataFrame()
    rows = result.data if isinstance(result.data, list) else [result.data]
    return pd.DataFrame.from_records(rows)
