"""Localization entry extraction and properties document synchronization.

Public API:
    - extract_one / extract_from_window / extract_batch: find entries in text
    - merge / merge_fragment: merge entries into properties text
    - PropertiesStore: fetch, merge, commit and invalidate remote documents
    - PropertiesCache: TTL cache with stale-while-revalidate lookups
    - SubmissionService: submit single entries or batches
    - create_submission_service(): wire everything from settings
"""

from propsync.modules.i18n.cache import PropertiesCache
from propsync.modules.i18n.errors import (
    CONFIGURATION_ERROR,
    EMPTY_BATCH,
    ConfigurationError,
)
from propsync.modules.i18n.extractor import (
    KeyReference,
    contains_match,
    extract_batch,
    extract_from_json,
    extract_from_text,
    extract_from_window,
    extract_one,
    find_key_references,
    looks_like_json,
)
from propsync.modules.i18n.factory import (
    create_cache,
    create_client,
    create_store,
    create_submission_service,
)
from propsync.modules.i18n.merge import MergeOutcome, merge, merge_fragment
from propsync.modules.i18n.models import (
    Entry,
    Locale,
    MergeResult,
    dedupe_entries,
    derive_locale_path,
    is_namespaced_key,
)
from propsync.modules.i18n.properties import PropertiesDocument, parse
from propsync.modules.i18n.service import SubmissionReport, SubmissionService
from propsync.modules.i18n.store import PropertiesStore

__all__ = [
    "CONFIGURATION_ERROR",
    "EMPTY_BATCH",
    "ConfigurationError",
    "Entry",
    "KeyReference",
    "Locale",
    "MergeOutcome",
    "MergeResult",
    "PropertiesCache",
    "PropertiesDocument",
    "PropertiesStore",
    "SubmissionReport",
    "SubmissionService",
    "contains_match",
    "create_cache",
    "create_client",
    "create_store",
    "create_submission_service",
    "dedupe_entries",
    "derive_locale_path",
    "extract_batch",
    "extract_from_json",
    "extract_from_text",
    "extract_from_window",
    "extract_one",
    "find_key_references",
    "is_namespaced_key",
    "looks_like_json",
    "merge",
    "merge_fragment",
    "parse",
]
