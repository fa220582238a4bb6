"""Factory functions for creating i18n sync components.

Wires the code platform client, store, cache and submission service from the
application settings.
"""

from typing import List, Optional

import structlog

from propsync.infrastructure.configuration import Settings, settings as default_settings
from propsync.integrations.code_platform import CodePlatformClient
from propsync.modules.i18n.cache import PropertiesCache
from propsync.modules.i18n.models import Locale
from propsync.modules.i18n.service import SubmissionService
from propsync.modules.i18n.store import PropertiesStore

logger = structlog.get_logger()


def _secondary_locales(config: Settings) -> List[Locale]:
    return [Locale.from_string(value) for value in config.i18n.SECONDARY_LOCALES]


def create_client(config: Optional[Settings] = None) -> CodePlatformClient:
    """Create a code platform client from settings."""
    config = config or default_settings
    return CodePlatformClient(
        base_url=config.code_platform.BASE_URL,
        private_token=config.code_platform.PRIVATE_TOKEN,
        timeout=config.code_platform.TIMEOUT_SECONDS,
    )


def create_store(
    config: Optional[Settings] = None, client: Optional[CodePlatformClient] = None
) -> PropertiesStore:
    """Create a PropertiesStore.

    Raises:
        ValueError: If a configured locale is not supported.
    """
    config = config or default_settings
    return PropertiesStore(
        client=client or create_client(config),
        primary_locale=Locale.from_string(config.i18n.PRIMARY_LOCALE),
        secondary_locales=_secondary_locales(config),
    )


def create_cache(
    config: Optional[Settings] = None, store: Optional[PropertiesStore] = None
) -> PropertiesCache:
    """Create a PropertiesCache for the configured primary document.

    The cache's translation locale (the second value of lookup()) is the
    configured translation locale.
    """
    config = config or default_settings
    store = store or create_store(config)

    translation = Locale.from_string(config.i18n.TRANSLATION_LOCALE)
    secondaries = _secondary_locales(config)
    if translation in secondaries:
        secondaries.remove(translation)
    secondaries.insert(0, translation)

    cache = PropertiesCache(
        store=store,
        project_id=config.code_platform.PROJECT_ID,
        branch=config.i18n.TARGET_BRANCH,
        primary_path=config.i18n.PRIMARY_PROPERTIES_PATH,
        primary_locale=store.primary_locale,
        secondary_locales=secondaries,
        ttl_seconds=config.i18n.CACHE_TTL_SECONDS,
    )
    logger.info(
        "properties_cache_created",
        path=cache.primary_path,
        locales=[locale.value for locale in cache.locales],
        ttl_seconds=cache.ttl_seconds,
    )
    return cache


def create_submission_service(
    config: Optional[Settings] = None,
    store: Optional[PropertiesStore] = None,
    cache: Optional[PropertiesCache] = None,
) -> SubmissionService:
    """Create a SubmissionService sharing one store with its cache.

    Usage:
        service = create_submission_service()
        result = service.submit_one(Entry(key="DPN.Order.Missing", value="订单不存在"))
    """
    config = config or default_settings
    store = store or create_store(config)
    cache = cache or create_cache(config, store=store)
    return SubmissionService(store=store, cache=cache, settings=config)
