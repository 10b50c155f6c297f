"""
Jeb's API — Settings Tests
===========================

What:  Environment parsing, defaults and startup validation of Settings.
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from jebs_api.config import (
    DEFAULT_APPLICATION_EMAIL,
    DEFAULT_CORS_ORIGIN,
    DEFAULT_EMAIL_FROM,
    Settings,
)


class TestDefaults:

    def test_defaults_without_environment(self):
        settings = Settings(_env_file=None)

        assert settings.service_name == "jebs-api"
        assert settings.jeb_application_email == DEFAULT_APPLICATION_EMAIL == "jebs@marziale.tech"
        assert settings.cors_origin == DEFAULT_CORS_ORIGIN == "*"
        assert settings.email_from == DEFAULT_EMAIL_FROM
        assert settings.stripe_configured is False
        assert settings.email_configured is False
        assert settings.enable_docs is False

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("STRIPE_SECRET_KEY", "sk_test_env")
        monkeypatch.setenv("RESEND_API_KEY", "re_env")
        monkeypatch.setenv("JEB_APPLICATION_EMAIL", "owner@example.com")
        monkeypatch.setenv("CORS_ORIGIN", "https://jebs.example.com")

        settings = Settings(_env_file=None)

        assert settings.stripe_secret_key == "sk_test_env"
        assert settings.stripe_configured is True
        assert settings.email_configured is True
        assert settings.jeb_application_email == "owner@example.com"
        assert settings.cors_origin == "https://jebs.example.com"

    @pytest.mark.parametrize("blank", ["", "   "])
    def test_blank_values_fall_back(self, monkeypatch, blank):
        monkeypatch.setenv("JEB_APPLICATION_EMAIL", blank)
        monkeypatch.setenv("CORS_ORIGIN", blank)

        settings = Settings(_env_file=None)

        assert settings.jeb_application_email == DEFAULT_APPLICATION_EMAIL
        assert settings.cors_origin == DEFAULT_CORS_ORIGIN

    def test_whitespace_key_is_not_configured(self, monkeypatch):
        monkeypatch.setenv("STRIPE_SECRET_KEY", "  ")

        assert Settings(_env_file=None).stripe_configured is False


class TestValidation:

    def test_log_level_normalised(self):
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_log_level_rejected(self):
        with pytest.raises(PydanticValidationError):
            Settings(_env_file=None, log_level="chatty")

    def test_frozen(self):
        settings = Settings(_env_file=None)
        with pytest.raises(PydanticValidationError):
            settings.cors_origin = "https://elsewhere.example.com"

    def test_production_check_lists_every_missing_key(self):
        with pytest.raises(ValueError) as exc_info:
            Settings(_env_file=None).validate_required_for_production()

        assert "STRIPE_SECRET_KEY" in str(exc_info.value)
        assert "RESEND_API_KEY" in str(exc_info.value)

    def test_production_check_passes_when_configured(self, settings):
        settings.validate_required_for_production()
