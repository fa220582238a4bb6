"""TTL cache of per-locale key -> value mappings.

Lookups never block on the network. When the cache is older than its TTL a
lookup schedules one background refresh and returns whatever is currently held
(stale-while-revalidate). Successful commits patch the primary mapping in place
through write_through so readers see new values before the next refresh.
"""

import time
from concurrent.futures import Future, ThreadPoolExecutor
from threading import Lock
from typing import Callable, Dict, Iterable, Optional, Sequence, Tuple

from propsync.infrastructure.logging import get_module_logger
from propsync.modules.i18n.models import Entry, Locale
from propsync.modules.i18n.properties import parse_mapping
from propsync.modules.i18n.store import PropertiesStore

logger = get_module_logger()

DEFAULT_TTL_SECONDS = 300


class PropertiesCache:
    """Background-refreshed view of the primary and secondary locale documents.

    One cache instance covers one primary document on one branch. The
    ``last_refresh`` timestamp and the ``in_flight`` guard are shared by every
    key and locale of the instance.

    Attributes:
        store: Store used to fetch documents during refresh.
        ttl_seconds: Age after which the next lookup schedules a refresh.
        last_refresh: Clock reading of the last refresh with at least one
            successful locale, None until the first one.
    """

    def __init__(
        self,
        store: PropertiesStore,
        project_id: str,
        branch: str,
        primary_path: str,
        primary_locale: Locale = Locale.ZH,
        secondary_locales: Sequence[Locale] = (Locale.EN, Locale.ZH_TW),
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.store = store
        self.project_id = project_id
        self.branch = branch
        self.primary_path = primary_path
        self.primary_locale = primary_locale
        self.secondary_locales = tuple(secondary_locales)
        self.ttl_seconds = ttl_seconds
        self._clock = clock

        self._values: Dict[Locale, Dict[str, str]] = {
            locale: {} for locale in self.locales
        }
        self.last_refresh: Optional[float] = None
        self.in_flight = False
        self._lock = Lock()
        self._executor = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="propsync-cache-refresh"
        )
        self._shutdown = False

    @property
    def locales(self) -> Tuple[Locale, ...]:
        return (self.primary_locale, *self.secondary_locales)

    @property
    def translation_locale(self) -> Optional[Locale]:
        return self.secondary_locales[0] if self.secondary_locales else None

    def is_stale(self) -> bool:
        if self.last_refresh is None:
            return True
        return self._clock() - self.last_refresh > self.ttl_seconds

    def lookup(self, key: str) -> Tuple[Optional[str], Optional[str]]:
        """Return (primary value, translation value) currently held for key.

        Schedules a refresh first when the cache is stale, but never waits for
        it: the values returned may be stale or absent.
        """
        self.refresh_if_stale()
        with self._lock:
            primary = self._values[self.primary_locale].get(key)
            secondary = None
            if self.translation_locale is not None:
                secondary = self._values[self.translation_locale].get(key)
        return primary, secondary

    def lookup_all(self, key: str) -> Dict[Locale, str]:
        """Return every locale's value for key, leaving out locales without one."""
        self.refresh_if_stale()
        with self._lock:
            return {
                locale: values[key]
                for locale, values in self._values.items()
                if key in values
            }

    def contains_key(self, key: str) -> bool:
        self.refresh_if_stale()
        with self._lock:
            return key in self._values[self.primary_locale]

    def describe(self, key: str) -> str:
        """One-line summary of a key's values, e.g. "DPN.A | zh: 值 | en: value"."""
        values = self.lookup_all(key)
        if not values:
            return f"{key} (not found)"
        parts = [f"{locale.value}: {value}" for locale, value in values.items()]
        return " | ".join([key, *parts])

    def refresh_if_stale(self) -> Optional[Future]:
        """Schedule a background refresh when stale and none is running.

        Returns:
            The Future of the scheduled refresh, or None when nothing was
            scheduled.
        """
        with self._lock:
            if self._shutdown or self.in_flight or not self.is_stale():
                return None
            self.in_flight = True

        logger.debug("cache_refresh_scheduled", path=self.primary_path)
        try:
            return self._executor.submit(self._refresh)
        except RuntimeError as e:
            # Executor shut down between the check and the submit
            logger.warning("cache_refresh_not_scheduled", error=str(e))
            with self._lock:
                self.in_flight = False
            return None

    def force_refresh(self) -> None:
        """Mark the cache stale so the next check refreshes it."""
        with self._lock:
            self.last_refresh = None

    def write_through(self, key: str, value: str, locale: Optional[Locale] = None) -> None:
        """Patch one value after a successful commit, bypassing the TTL."""
        self.write_through_batch([Entry(key=key, value=value)], locale=locale)

    def write_through_batch(
        self, entries: Iterable[Entry], locale: Optional[Locale] = None
    ) -> None:
        """Patch several values after a successful commit.

        Each entry's ``value`` is written to ``locale`` (the primary locale by
        default).
        """
        target = locale or self.primary_locale
        with self._lock:
            values = self._values.setdefault(target, {})
            for entry in entries:
                values[entry.key] = entry.value

    def shutdown(self, wait: bool = True) -> None:
        """Stop the refresh worker; later lookups serve the held values only."""
        with self._lock:
            self._shutdown = True
        self._executor.shutdown(wait=wait)
        logger.debug("cache_shutdown", path=self.primary_path)

    def _refresh(self) -> Dict[Locale, bool]:
        """Fetch every locale document and replace its mapping on success.

        Returns:
            Locale -> whether its mapping was replaced.
        """
        outcomes: Dict[Locale, bool] = {}
        try:
            for locale in self.locales:
                outcomes[locale] = self._refresh_locale(locale)
        finally:
            with self._lock:
                if any(outcomes.values()):
                    self.last_refresh = self._clock()
                self.in_flight = False

        logger.info(
            "cache_refreshed",
            path=self.primary_path,
            refreshed=[locale.value for locale, ok in outcomes.items() if ok],
            failed=[locale.value for locale, ok in outcomes.items() if not ok],
        )
        return outcomes

    def _refresh_locale(self, locale: Locale) -> bool:
        path = self.store.locale_path(self.primary_path, locale)
        if path is None:
            logger.warning("cache_locale_path_not_derivable", locale=locale.value)
            return False

        try:
            result = self.store.fetch(self.project_id, self.branch, path)
        except Exception as e:  # keep the previous mapping for this locale
            logger.exception("cache_refresh_failed", locale=locale.value, path=path, error=str(e))
            return False

        if not result.is_success:
            logger.warning(
                "cache_refresh_failed",
                locale=locale.value,
                path=path,
                error=result.message,
                error_code=result.error_code,
            )
            return False

        mapping = parse_mapping(result.data or "")
        with self._lock:
            self._values[locale] = mapping
        return True
