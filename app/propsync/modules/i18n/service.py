"""Submission orchestrator.

Turns confirmed entries into commits against the primary-locale document and,
for entries carrying a translation, against the translation-locale document.
Primary-commit failures are returned to the caller; secondary-commit failures
are logged only, since the primary commit has already landed.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from propsync.infrastructure.configuration import Settings
from propsync.infrastructure.logging import bind_operation_context, get_module_logger
from propsync.infrastructure.operations import OperationResult
from propsync.modules.i18n.cache import PropertiesCache
from propsync.modules.i18n.errors import (
    CONFIGURATION_ERROR,
    EMPTY_BATCH,
    ConfigurationError,
)
from propsync.modules.i18n.models import (
    Entry,
    Locale,
    MergeResult,
    dedupe_entries,
    derive_locale_path,
)
from propsync.modules.i18n.store import PropertiesStore

logger = get_module_logger()

# Keys listed in a batch commit message before the "(N total)" suffix kicks in
BATCH_MESSAGE_KEY_LIMIT = 3


def batch_commit_message(keys: Sequence[str]) -> str:
    """Build the commit message for a batch submission.

    Example:
        batch_commit_message(["A", "B", "C", "D"])
        # "feat: batch add i18n entries - A, B, C (4 total)"
    """
    listed = ", ".join(keys[:BATCH_MESSAGE_KEY_LIMIT])
    message = f"feat: batch add i18n entries - {listed}"
    if len(keys) > BATCH_MESSAGE_KEY_LIMIT:
        message += f" ({len(keys)} total)"
    return message


@dataclass(frozen=True)
class SubmissionReport:
    """Outcome of a submission.

    Attributes:
        primary: Counts of the primary-locale commit.
        secondary: Counts of the translation-locale commit, None when no
            translation was submitted or that commit failed.
    """

    primary: MergeResult
    secondary: Optional[MergeResult] = None

    @property
    def combined(self) -> MergeResult:
        if self.secondary is None:
            return self.primary
        return self.primary + self.secondary

    @property
    def summary(self) -> str:
        text = f"primary: {self.primary.describe()}"
        if self.secondary is not None:
            text += f"; secondary: {self.secondary.describe()}"
        return text


class SubmissionService:
    """Submit entries to the configured properties documents.

    Args:
        store: Store performing fetch/merge/commit.
        cache: Cache patched after successful commits, optional.
        settings: Application settings (code platform and i18n sections).
    """

    def __init__(
        self,
        store: PropertiesStore,
        cache: Optional[PropertiesCache],
        settings: Settings,
    ):
        self.store = store
        self.cache = cache
        self.settings = settings

    @property
    def project_id(self) -> str:
        return self.settings.code_platform.PROJECT_ID

    @property
    def branch(self) -> str:
        return self.settings.i18n.TARGET_BRANCH

    @property
    def primary_path(self) -> str:
        return self.settings.i18n.PRIMARY_PROPERTIES_PATH

    @property
    def translation_locale(self) -> Locale:
        return Locale.from_string(self.settings.i18n.TRANSLATION_LOCALE)

    def check_configuration(self) -> None:
        """Raise ConfigurationError when a required setting is missing or a
        locale setting names an unsupported locale.
        """
        missing = list(self.settings.code_platform.missing_settings)
        if not self.primary_path.strip():
            missing.append("I18N_PRIMARY_PROPERTIES_PATH")

        i18n = self.settings.i18n
        locales = [
            ("I18N_PRIMARY_LOCALE", i18n.PRIMARY_LOCALE),
            ("I18N_TRANSLATION_LOCALE", i18n.TRANSLATION_LOCALE),
        ] + [("I18N_SECONDARY_LOCALES", value) for value in i18n.SECONDARY_LOCALES]
        supported = {locale.value for locale in Locale}
        invalid = tuple(
            f"{name}={value}" for name, value in locales if value not in supported
        )

        problems = []
        if missing:
            problems.append(f"Missing configuration: {', '.join(missing)}")
        if invalid:
            problems.append(f"Unsupported locale: {', '.join(invalid)}")
        if problems:
            raise ConfigurationError(
                "; ".join(problems), missing=tuple(missing), invalid=invalid
            )

    def submit_one(self, entry: Entry) -> OperationResult:
        """Commit a single entry.

        Returns:
            SUCCESS with a SubmissionReport, or the error of the primary commit.
        """
        with bind_operation_context(operation="submit_one", key=entry.key):
            try:
                self.check_configuration()
            except ConfigurationError as e:
                logger.warning(
                    "submission_not_configured",
                    missing=list(e.missing),
                    invalid=list(e.invalid),
                )
                return OperationResult.permanent_error(
                    str(e), error_code=CONFIGURATION_ERROR
                )

            message = self.settings.i18n.COMMIT_MESSAGE_TEMPLATE.replace(
                "{key}", entry.key
            )
            return self._submit([entry], entry.to_properties_line(), message)

    def submit_batch(self, entries: Iterable[Entry]) -> OperationResult:
        """Commit several entries in one primary commit.

        Entries sharing a key are collapsed, the last one wins. Entries with a
        translation go to one additional commit against the translation-locale
        document.

        Returns:
            SUCCESS with a SubmissionReport; EMPTY_BATCH for an empty batch,
            CONFIGURATION_ERROR when settings are missing, otherwise the error
            of the primary commit.
        """
        batch = dedupe_entries(entries)
        if not batch:
            return OperationResult.permanent_error(
                "No entries to submit", error_code=EMPTY_BATCH
            )

        with bind_operation_context(operation="submit_batch", entry_count=len(batch)):
            try:
                self.check_configuration()
            except ConfigurationError as e:
                logger.warning(
                    "submission_not_configured",
                    missing=list(e.missing),
                    invalid=list(e.invalid),
                )
                return OperationResult.permanent_error(
                    str(e), error_code=CONFIGURATION_ERROR
                )

            keys = [entry.key for entry in batch]
            fragment = "\n".join(entry.to_properties_line() for entry in batch)
            return self._submit(batch, fragment, batch_commit_message(keys))

    def _submit(
        self, entries: List[Entry], fragment: str, message: str
    ) -> OperationResult:
        logger.info("submitting_entries", entry_count=len(entries), path=self.primary_path)

        result = self.store.commit(
            self.project_id, self.branch, self.primary_path, fragment, message
        )
        if not result.is_success:
            logger.error(
                "primary_commit_failed",
                error=result.message,
                error_code=result.error_code,
            )
            return result

        primary: MergeResult = result.data
        if primary.changed_count and self.cache is not None:
            self.cache.write_through_batch(
                [Entry(key=e.key.strip(), value=e.value.strip()) for e in entries]
            )

        translated = [entry for entry in entries if entry.has_secondary_value]
        secondary = self._submit_translations(translated, message) if translated else None

        report = SubmissionReport(primary=primary, secondary=secondary)
        logger.info("submission_completed", summary=report.summary)
        return OperationResult.success(data=report, message=report.summary)

    def _submit_translations(
        self, entries: List[Entry], message: str
    ) -> Optional[MergeResult]:
        locale = self.translation_locale
        path = derive_locale_path(
            self.primary_path, self.store.primary_locale, locale
        )
        if path is None:
            logger.warning(
                "translation_path_not_derivable",
                primary_path=self.primary_path,
                locale=locale.value,
            )
            return None

        fragment = "\n".join(entry.to_secondary_properties_line() for entry in entries)
        result = self.store.commit(
            self.project_id, self.branch, path, fragment, message, invalidate=False
        )
        if not result.is_success:
            logger.warning(
                "secondary_commit_failed",
                path=path,
                error=result.message,
                error_code=result.error_code,
            )
            return None

        secondary: MergeResult = result.data
        if secondary.changed_count and self.cache is not None:
            self.cache.write_through_batch(
                [
                    Entry(key=e.key.strip(), value=e.secondary_value.strip())
                    for e in entries
                ],
                locale=locale,
            )
        return secondary
