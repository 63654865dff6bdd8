# backend/tests/test_config.py

import pytest

from core.config import Settings, DEFAULT_JWT_SECRET, validate_production_config


class TestSettings:
    def test_cors_origins_from_comma_string(self, monkeypatch):
        monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example")

        assert Settings().cors_origins == ["https://a.example", "https://b.example"]

    def test_email_enabled_requires_credentials(self):
        assert not Settings(smtp_server="smtp.example.com").email_enabled
        assert Settings(
            smtp_server="smtp.example.com", smtp_username="u", smtp_password="p"
        ).email_enabled

    @pytest.mark.parametrize("environment,expected", [
        ("production", True),
        ("Production", True),
        ("development", False),
    ])
    def test_is_production(self, environment, expected):
        assert Settings(environment=environment).is_production is expected

    def test_production_rejects_default_secret(self, monkeypatch):
        monkeypatch.setattr(
            "core.config.settings",
            Settings(environment="production", debug=False, jwt_secret_key=DEFAULT_JWT_SECRET),
        )

        with pytest.raises(ValueError, match="JWT_SECRET_KEY"):
            validate_production_config()

    def test_production_accepts_custom_secret(self, monkeypatch):
        monkeypatch.setattr(
            "core.config.settings",
            Settings(environment="production", debug=False, jwt_secret_key="s3cr3t"),
        )

        validate_production_config()
