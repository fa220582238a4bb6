"""Unit tests for propsync.modules.i18n.cache."""

import threading

import pytest

from propsync.modules.i18n.cache import PropertiesCache
from propsync.modules.i18n.models import Entry, Locale
from tests.fakes import BRANCH, EN_PATH, PRIMARY_PATH, PROJECT_ID, ZH_TW_PATH, server_error

TTL = 300


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(store, clock):
    cache = PropertiesCache(
        store,
        project_id=PROJECT_ID,
        branch=BRANCH,
        primary_path=PRIMARY_PATH,
        primary_locale=Locale.ZH,
        secondary_locales=(Locale.EN, Locale.ZH_TW),
        ttl_seconds=TTL,
        clock=clock,
    )
    yield cache
    cache.shutdown()


@pytest.fixture
def seeded(fake_client):
    fake_client.files[PRIMARY_PATH] = "DPN.A = 一\nDPN.B = 二\n"
    fake_client.files[EN_PATH] = "DPN.A = one\n"
    fake_client.files[ZH_TW_PATH] = "DPN.A = 壹\n"
    return fake_client


def refresh_now(cache):
    future = cache.refresh_if_stale()
    assert future is not None
    return future.result(timeout=5)


@pytest.mark.unit
class TestLookup:
    def test_first_lookup_returns_empty_and_schedules_refresh(self, cache, seeded):
        seeded.gate = threading.Event()

        assert cache.lookup("DPN.A") == (None, None)
        assert cache.in_flight

        seeded.gate.set()
        cache.shutdown(wait=True)

        assert cache.lookup("DPN.A") == ("一", "one")

    def test_values_after_refresh(self, cache, seeded, clock):
        outcomes = refresh_now(cache)

        assert outcomes == {Locale.ZH: True, Locale.EN: True, Locale.ZH_TW: True}
        assert cache.last_refresh == clock.now
        assert cache.lookup("DPN.A") == ("一", "one")
        assert cache.lookup("DPN.B") == ("二", None)
        assert cache.lookup("DPN.Missing") == (None, None)

    def test_lookup_all_and_contains_key(self, cache, seeded):
        refresh_now(cache)

        assert cache.lookup_all("DPN.A") == {
            Locale.ZH: "一",
            Locale.EN: "one",
            Locale.ZH_TW: "壹",
        }
        assert cache.contains_key("DPN.B")
        assert not cache.contains_key("DPN.Missing")

    def test_describe(self, cache, seeded):
        refresh_now(cache)

        assert cache.describe("DPN.A") == "DPN.A | zh: 一 | en: one | zh_TW: 壹"
        assert cache.describe("DPN.Missing") == "DPN.Missing (not found)"


@pytest.mark.unit
class TestStaleWhileRevalidate:
    def test_fresh_cache_does_not_refresh(self, cache, seeded, clock):
        refresh_now(cache)
        clock.advance(TTL)

        assert cache.refresh_if_stale() is None

    def test_stale_lookup_returns_old_value_then_refreshes(self, cache, seeded, clock):
        refresh_now(cache)
        seeded.files[PRIMARY_PATH] = "DPN.A = 新\n"
        clock.advance(TTL + 1)
        seeded.gate = threading.Event()

        assert cache.is_stale()
        assert cache.lookup("DPN.A")[0] == "一"

        seeded.gate.set()
        cache.shutdown(wait=True)

        assert cache.lookup("DPN.A")[0] == "新"
        assert cache.lookup("DPN.B")[0] is None

    def test_in_flight_refresh_blocks_another(self, cache, seeded):
        seeded.gate = threading.Event()

        first = cache.refresh_if_stale()
        second = cache.refresh_if_stale()
        seeded.gate.set()

        assert first is not None
        assert second is None
        first.result(timeout=5)
        assert len(seeded.reads) == 3

    def test_force_refresh_marks_stale(self, cache, seeded):
        refresh_now(cache)
        assert not cache.is_stale()

        cache.force_refresh()

        assert cache.is_stale()
        assert cache.refresh_if_stale() is not None

    def test_partial_failure_keeps_previous_mapping(self, cache, seeded, clock):
        refresh_now(cache)
        seeded.files[PRIMARY_PATH] = "DPN.A = 新\n"
        seeded.get_failures[EN_PATH] = server_error()
        clock.advance(TTL + 1)

        outcomes = refresh_now(cache)

        assert outcomes[Locale.EN] is False
        assert outcomes[Locale.ZH] is True
        assert cache.lookup("DPN.A") == ("新", "one")
        assert cache.last_refresh == clock.now
        assert cache.in_flight is False

    def test_total_failure_leaves_cache_stale(self, cache, fake_client):
        for path in (PRIMARY_PATH, EN_PATH, ZH_TW_PATH):
            fake_client.get_failures[path] = server_error()

        outcomes = refresh_now(cache)

        assert not any(outcomes.values())
        assert cache.last_refresh is None
        assert cache.in_flight is False

    def test_exception_during_fetch_is_contained(self, cache, seeded):
        seeded.get_exceptions[ZH_TW_PATH] = RuntimeError("socket closed")

        outcomes = refresh_now(cache)

        assert outcomes[Locale.ZH_TW] is False
        assert cache.in_flight is False

    def test_missing_secondary_document_is_empty(self, cache, fake_client):
        fake_client.files[PRIMARY_PATH] = "DPN.A = 一\n"

        refresh_now(cache)

        assert cache.lookup("DPN.A") == ("一", None)

    def test_shutdown_stops_scheduling(self, cache):
        cache.shutdown()

        assert cache.refresh_if_stale() is None


@pytest.mark.unit
class TestWriteThrough:
    def test_write_through_visible_without_refresh(self, cache, seeded, fake_client):
        refresh_now(cache)
        reads = len(fake_client.reads)

        cache.write_through("DPN.C", "三")

        assert cache.lookup("DPN.C") == ("三", None)
        assert len(fake_client.reads) == reads

    def test_write_through_batch_to_secondary_locale(self, cache, seeded):
        refresh_now(cache)

        cache.write_through_batch(
            [Entry(key="DPN.A", value="first"), Entry(key="DPN.B", value="second")],
            locale=Locale.EN,
        )

        assert cache.lookup("DPN.A") == ("一", "first")
        assert cache.lookup("DPN.B") == ("二", "second")
