import pytest

from analytics_demo.mockdata import (
    CircularDependencyError,
    GenerationCache,
    GeneratorError,
    TableRegistry,
    TableSpec,
    default_registry,
)
from analytics_demo.mockdata.records import DailyActiveUsers, WeeklyRetention


def test_default_registry_builds_every_table():
    registry = default_registry()
    cache = GenerationCache()
    for name in registry.names():
        snapshot = registry.snapshot(name, cache)
        assert isinstance(snapshot, tuple)
    assert len(registry.snapshot("dau", cache)) == 181
    assert registry.snapshot("user_invites", cache) == ()


def test_aliases_share_one_snapshot():
    registry = default_registry()
    cache = GenerationCache()
    assert registry.snapshot("monthly_revenue", cache) is registry.snapshot("monthly_revenue_summary", cache)
    assert registry.snapshot("weekly_conversion_stats", cache) is registry.snapshot("monthly_conversion_stats", cache)
    assert "monthly_revenue" not in cache.keys()


def test_unknown_table_is_empty_and_not_cached(caplog):
    cache = GenerationCache()
    assert default_registry().snapshot("no_such_table", cache) == ()
    assert len(cache) == 0
    assert "Unknown table" in caplog.text


def test_dependent_table_reuses_cached_dependency():
    calls = []

    def base():
        calls.append("base")
        return [{"x": 1}, {"x": 2}]

    def doubled(rows):
        return [{"x": r["x"] * 2} for r in rows]

    registry = TableRegistry([TableSpec("base", base), TableSpec("doubled", doubled, depends_on=("base",))])
    cache = GenerationCache()
    registry.snapshot("base", cache)
    assert registry.snapshot("doubled", cache) == ({"x": 2}, {"x": 4})
    assert calls == ["base"]


def test_duplicate_names_rejected():
    registry = TableRegistry([TableSpec("a", list, aliases=("b",))])
    with pytest.raises(ValueError):
        registry.register(TableSpec("b", list))


def test_check_detects_cycles_and_unknown_dependencies():
    cyclic = TableRegistry([
        TableSpec("a", lambda b: [], depends_on=("b",)),
        TableSpec("b", lambda a: [], depends_on=("a",)),
    ])
    with pytest.raises(CircularDependencyError):
        cyclic.check()
    with pytest.raises(CircularDependencyError):
        cyclic.snapshot("a", GenerationCache())

    dangling = TableRegistry([TableSpec("a", lambda x: [], depends_on=("missing",))])
    with pytest.raises(GeneratorError):
        dangling.check()


def test_invalid_rows_raise_generator_error():
    registry = TableRegistry([
        TableSpec("dau", lambda: [{"activity_date": "2025-01-01", "active_users": "many", "sessions": 1}],
                  DailyActiveUsers),
    ])
    cache = GenerationCache()
    with pytest.raises(GeneratorError):
        registry.snapshot("dau", cache)
    assert "dau" not in cache


def test_extra_fields_and_nan_are_rejected():
    registry = TableRegistry([
        TableSpec("extra", lambda: [{"activity_date": "d", "active_users": 1, "sessions": 1, "bogus": 1}],
                  DailyActiveUsers),
        TableSpec("nan", lambda: [{"week_start": "d", "retention_rate": float("nan"),
                                    "active_users": 1, "returning_users": 1}],
                  WeeklyRetention),
    ])
    with pytest.raises(GeneratorError):
        registry.snapshot("extra", GenerationCache())
    with pytest.raises(GeneratorError):
        registry.snapshot("nan", GenerationCache())


def test_generator_exceptions_are_wrapped():
    def broken():
        raise KeyError("boom")

    registry = TableRegistry([TableSpec("broken", broken)])
    with pytest.raises(GeneratorError) as exc:
        registry.snapshot("broken", GenerationCache())
    assert isinstance(exc.value.__cause__, KeyError)
