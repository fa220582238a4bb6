"""Shared fixtures: an in-memory code platform and wired i18n components."""

import pytest

from propsync.infrastructure.configuration import (
    CodePlatformSettings,
    I18nSettings,
    Settings,
)
from propsync.modules.i18n.models import Locale
from propsync.modules.i18n.store import PropertiesStore
from tests.fakes import BRANCH, PRIMARY_PATH, PROJECT_ID, FakeCodePlatformClient


@pytest.fixture
def fake_client():
    return FakeCodePlatformClient()


@pytest.fixture
def store(fake_client):
    return PropertiesStore(
        fake_client,
        primary_locale=Locale.ZH,
        secondary_locales=(Locale.EN, Locale.ZH_TW),
    )


@pytest.fixture
def make_settings():
    """Build Settings with explicit credentials and primary document path."""

    def _make(
        token: str = "secret-token",
        project_id: str = PROJECT_ID,
        primary_path: str = PRIMARY_PATH,
        **i18n_overrides,
    ) -> Settings:
        code_platform = CodePlatformSettings(
            CODE_PLATFORM_PRIVATE_TOKEN=token,
            CODE_PLATFORM_PROJECT_ID=project_id,
        )
        i18n_values = {
            "I18N_TARGET_BRANCH": BRANCH,
            "I18N_PRIMARY_PROPERTIES_PATH": primary_path,
        }
        i18n_values.update(i18n_overrides)
        return Settings(code_platform=code_platform, i18n=I18nSettings(**i18n_values))

    return _make


@pytest.fixture
def app_settings(make_settings):
    return make_settings()
