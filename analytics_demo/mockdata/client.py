from __future__ import annotations

import asyncio
import copy
import logging
from typing import Any, Callable, Optional

from ..auth import AuthService
from ..config import Settings, get_settings
from ..utils import fixed_delay
from .cache import GenerationCache
from .generators import generate_insights
from .query import QueryBuilder, QueryResult
from .registry import TableRegistry, default_registry

logger = logging.getLogger(__name__)

# Canned remote procedure responses; unknown procedures acknowledge with None.
RPC_RESPONSES = {
    "get_allowed_routes": ["*"],
    "log_login": None,
    "log_activity": None,
}


class AuthSubscription:
    def __init__(self, handle: Optional[asyncio.TimerHandle] = None) -> None:
        self._handle = handle
        self.active = True

    def unsubscribe(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
        self.active = False


class AuthClient:
    """Session/identity surface that always reports the demo user."""

    def __init__(self, settings: Settings, service: Optional[AuthService] = None) -> None:
        self.settings = settings
        self.service = service or AuthService(settings)

    async def get_session(self) -> QueryResult:
        return QueryResult(data={"session": self.service.session().model_dump()})

    async def get_user(self) -> QueryResult:
        return QueryResult(data={"user": self.service.demo_user().model_dump()})

    async def sign_in_with_oauth(self, provider: Optional[str] = None, **options: Any) -> QueryResult:
        logger.debug("sign_in_with_oauth(%s) ignored in demo mode", provider)
        return QueryResult()

    async def sign_out(self) -> QueryResult:
        return QueryResult()

    def on_auth_state_change(self, callback: Callable[[str, dict], Any]) -> AuthSubscription:
        """Deliver one INITIAL_SESSION event, after a short delay when a loop is running."""
        session = self.service.session().model_dump()
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            callback("INITIAL_SESSION", session)
            return AuthSubscription()
        delay = self.settings.auth_callback_delay_ms / 1000.0
        return AuthSubscription(loop.call_later(delay, callback, "INITIAL_SESSION", session))


class FunctionsClient:
    """Edge-function calls with canned payloads."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    async def invoke(self, name: str, body: Any = None) -> QueryResult:
        await fixed_delay(self.settings.functions_latency_ms)
        if name == "generate-insights":
            mode = body.get("mode") if isinstance(body, dict) else None
            if not isinstance(mode, str) or not mode:
                mode = "engagement"
            return QueryResult(data={"insights": generate_insights(mode), "cached": True})
        if name == "get-sat-seats":
            return QueryResult(data={"centers": [], "message": "Demo mode - SAT seat data unavailable"})
        logger.debug("Function '%s' has no demo payload", name)
        return QueryResult()


class StorageBucket:
    def __init__(self, name: str) -> None:
        self.name = name

    async def upload(self, path: str, file: Any = None, file_options: Optional[dict] = None) -> QueryResult:
        logger.debug("Upload to %s/%s skipped in demo mode", self.name, path)
        return QueryResult()

    def get_public_url(self, path: str) -> dict:
        return {"data": {"publicUrl": ""}}


class StorageClient:
    def from_(self, bucket: str) -> StorageBucket:
        return StorageBucket(bucket)


class SchemaScope:
    """``client.schema(name)``; table access is identical to the client's own."""

    def __init__(self, client: "MockClient", name: str) -> None:
        self.client = client
        self.name = name

    def from_(self, table: str) -> QueryBuilder:
        return self.client.from_(table)

    def table(self, table: str) -> QueryBuilder:
        return self.client.from_(table)


class MockClient:
    """Drop-in stand-in for the remote relational-data client.

    Table reads are served from generated snapshots held in ``cache``; several
    clients may share one cache so that every schema sees the same data.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        cache: Optional[GenerationCache] = None,
        registry: Optional[TableRegistry] = None,
        schema: str = "public_analytics",
    ) -> None:
        self.settings = settings or get_settings()
        self.cache = cache if cache is not None else GenerationCache()
        self.registry = registry if registry is not None else default_registry()
        self.default_schema = schema
        self.auth = AuthClient(self.settings)
        self.functions = FunctionsClient(self.settings)
        self.storage = StorageClient()

    def from_(self, table: str) -> QueryBuilder:
        snapshot = self.registry.snapshot(table, self.cache)
        return QueryBuilder(table, snapshot, self.settings)

    def table(self, table: str) -> QueryBuilder:
        return self.from_(table)

    def schema(self, name: str) -> SchemaScope:
        return SchemaScope(self, name)

    async def rpc(self, name: str, params: Optional[dict] = None) -> QueryResult:
        await fixed_delay(self.settings.rpc_latency_ms)
        logger.debug("rpc %s(%s)", name, params or {})
        return QueryResult(data=copy.deepcopy(RPC_RESPONSES.get(name)))

    def clear_cache(self) -> None:
        self.cache.clear()
