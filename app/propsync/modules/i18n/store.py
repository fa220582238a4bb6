"""Remote properties document store.

Commits merged documents through the code platform client and, after a
primary-locale document changes, removes the changed keys from the sibling
locale documents so the retranslation job regenerates them.

The remote file is last-write-wins: every commit fetches the latest text,
merges into it and writes the whole file back. Two overlapping commits to the
same file can overwrite each other.
"""

from typing import Collection, Dict, Iterable, Optional, Sequence

from propsync.infrastructure.logging import get_module_logger
from propsync.infrastructure.operations import OperationResult
from propsync.integrations.code_platform import CodePlatformClient
from propsync.modules.i18n.merge import merge_fragment
from propsync.modules.i18n.models import Locale, MergeResult, derive_locale_path
from propsync.modules.i18n.properties import parse

logger = get_module_logger()

INVALIDATION_MESSAGE_TEMPLATE = (
    "chore: remove keys pending retranslation (related change: {message})"
)


class PropertiesStore:
    """Fetch, merge and commit properties documents.

    Attributes:
        client: Code platform client used for every read and write.
        primary_locale: Locale of the documents submitted through commit().
        secondary_locales: Sibling locales invalidated after a primary change.
    """

    def __init__(
        self,
        client: CodePlatformClient,
        primary_locale: Locale = Locale.ZH,
        secondary_locales: Sequence[Locale] = (Locale.EN, Locale.ZH_TW),
    ):
        self.client = client
        self.primary_locale = primary_locale
        self.secondary_locales = tuple(secondary_locales)

    def locale_path(self, primary_path: str, locale: Locale) -> Optional[str]:
        """Path of a locale's document, None when it cannot be derived."""
        if locale == self.primary_locale:
            return primary_path
        return derive_locale_path(primary_path, self.primary_locale, locale)

    def secondary_paths(self, primary_path: str) -> Dict[Locale, str]:
        """Derive the sibling-locale paths; underivable locales are logged and left out."""
        paths = {}
        for locale in self.secondary_locales:
            path = self.locale_path(primary_path, locale)
            if path is None:
                logger.warning(
                    "locale_path_not_derivable",
                    primary_path=primary_path,
                    locale=locale.value,
                    marker=self.primary_locale.marker,
                )
                continue
            paths[locale] = path
        return paths

    def fetch(self, project_id: str, branch: str, path: str) -> OperationResult:
        """Fetch a document's text.

        Returns:
            SUCCESS with the text as ``data``; an absent file is a success with
            an empty string. Any other failure is returned unchanged.
        """
        result = self.client.get_file(project_id, branch, path)
        if result.is_not_found:
            return OperationResult.success(data="", message=f"{path} does not exist")
        return result

    def commit(
        self,
        project_id: str,
        branch: str,
        path: str,
        content: str,
        message: str,
        invalidate: bool = True,
    ) -> OperationResult:
        """Merge a properties fragment into a remote document and commit it.

        Args:
            project_id: Repository identifier.
            branch: Target branch.
            path: Document path.
            content: Properties fragment, one "key = value" per line.
            message: Commit message.
            invalidate: Remove the changed keys from the sibling-locale
                documents after a successful write.

        Returns:
            SUCCESS with a MergeResult as ``data``. Nothing is written when no
            key was added or updated. Fetch and write failures are returned as
            error results.
        """
        log = logger.bind(project_id=project_id, branch=branch, path=path)

        fetched = self.fetch(project_id, branch, path)
        if not fetched.is_success:
            log.error("commit_fetch_failed", error=fetched.message)
            return fetched

        existing_text = fetched.data or ""
        is_create = not existing_text
        outcome = merge_fragment(existing_text, content)

        if not outcome.has_changes:
            skipped = len(outcome.skipped)
            log.info("commit_skipped_no_changes", skipped=skipped)
            return OperationResult.success(
                data=MergeResult(
                    skipped=skipped,
                    message=f"Nothing to commit ({skipped} entries already up to date)",
                ),
                message="no changes",
            )

        log.info(
            "committing_document",
            operation="create" if is_create else "update",
            added=len(outcome.added),
            updated=len(outcome.updated),
            skipped=len(outcome.skipped),
        )
        written = self.client.create_or_update_file(
            project_id,
            branch,
            path,
            outcome.content,
            message,
            create=is_create,
        )
        if not written.is_success:
            return written

        counts = MergeResult(
            added=len(outcome.added),
            updated=len(outcome.updated),
            skipped=len(outcome.skipped),
        )
        merge_result = counts.with_message(f"Committed: {counts.describe()}")

        if invalidate:
            self.invalidate_secondary_locales(
                project_id, path, outcome.changed_keys, branch, message
            )

        return OperationResult.success(data=merge_result, message=merge_result.message)

    def invalidate_secondary_locales(
        self,
        project_id: str,
        primary_path: str,
        changed_keys: Collection[str],
        branch: str,
        origin_message: str,
    ) -> Dict[str, OperationResult]:
        """Remove changed keys from every sibling-locale document.

        Each path is handled on its own; a failure is logged and recorded in the
        returned mapping but never stops the remaining paths.

        Args:
            project_id: Repository identifier.
            primary_path: Path of the primary document that changed.
            changed_keys: Keys added or updated in the primary document.
            branch: Target branch.
            origin_message: Commit message of the primary change.

        Returns:
            Mapping of secondary path to its outcome. A success carries the
            list of removed keys as ``data`` (empty when nothing was removed).
        """
        outcomes: Dict[str, OperationResult] = {}
        if not changed_keys:
            return outcomes

        message = INVALIDATION_MESSAGE_TEMPLATE.format(message=origin_message)
        for locale, path in self.secondary_paths(primary_path).items():
            try:
                outcomes[path] = self._remove_keys(
                    project_id, branch, path, changed_keys, message
                )
            except Exception as e:  # one locale must never block the others
                logger.exception(
                    "invalidation_failed", path=path, locale=locale.value, error=str(e)
                )
                outcomes[path] = OperationResult.transient_error(
                    f"Invalidation of {path} failed: {e}", error_code="INVALIDATION_ERROR"
                )
        return outcomes

    def _remove_keys(
        self,
        project_id: str,
        branch: str,
        path: str,
        keys: Iterable[str],
        message: str,
    ) -> OperationResult:
        log = logger.bind(path=path)

        fetched = self.client.get_file(project_id, branch, path)
        if fetched.is_not_found or (fetched.is_success and not fetched.data):
            log.info("invalidation_skipped_missing_document")
            return OperationResult.success(data=[], message=f"{path} is absent or empty")
        if not fetched.is_success:
            log.warning("invalidation_fetch_failed", error=fetched.message)
            return fetched

        document = parse(fetched.data)
        present = set(document.keys())
        to_remove = sorted(key for key in keys if key in present)
        if not to_remove:
            log.info("invalidation_skipped_no_matching_keys")
            return OperationResult.success(data=[], message="No keys to remove")

        log.info("removing_keys", keys=to_remove)
        written = self.client.create_or_update_file(
            project_id,
            branch,
            path,
            document.without_keys(to_remove).serialize(),
            message,
        )
        if not written.is_success:
            log.warning("invalidation_commit_failed", error=written.message)
            return written

        return OperationResult.success(
            data=to_remove, message=f"Removed {len(to_remove)} keys from {path}"
        )
