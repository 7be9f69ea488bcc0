import pytest

from lifemate.core.config import EmailSettings, Settings, get_settings
from lifemate.utils.exceptions import ConfigurationException


def test_get_settings_is_cached():
    assert get_settings() is get_settings()


def test_email_settings_from_settings():
    settings = Settings(
        FRONTEND_URL="https://jobs.example.org/",
        EMAIL_FROM="hello@example.org",
        EMAIL_FROM_NAME="Jobs Team",
        APP_NAME="LifeMate",
    )

    config = EmailSettings.from_settings(settings)

    assert config.base_url == "https://jobs.example.org"
    assert config.sender == '"Jobs Team" <hello@example.org>'
    assert config.brand_name == "LifeMate"


def test_missing_frontend_url_is_a_configuration_error():
    with pytest.raises(ConfigurationException):
        EmailSettings.from_settings(Settings(FRONTEND_URL=""))


def test_missing_sender_is_a_configuration_error():
    with pytest.raises(ConfigurationException):
        EmailSettings.from_settings(Settings(EMAIL_FROM=""))
