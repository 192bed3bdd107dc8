"""Tests for configuration settings."""

import json

import pytest

from config.settings import GOOGLE_TOKEN_URI, Settings
from googleauth.errors import UnknownServiceError
from googleauth.scope_registry import IDENTITY_SCOPES, scopes_for_services, user_services
from googleauth.service_types import Service


@pytest.fixture
def clean_env(monkeypatch):
    """Keep developer environment variables out of Settings()."""
    for var in [
        "GOOGLE_CLIENT_SECRETS_FILE",
        "GOOGLE_CLIENT_ID",
        "GOOGLE_CLIENT_SECRET",
        "OAUTH_REDIRECT_URI",
        "OAUTH_AUTH_URI",
        "OAUTH_SERVICES",
        "OAUTH_MANAGE",
        "LOG_LEVEL",
        "LOG_TO_FILE",
        "LOG_PATH",
    ]:
        monkeypatch.delenv(var, raising=False)


def make_settings(**kwargs):
    return Settings(_env_file=None, **kwargs)


@pytest.mark.usefixtures("clean_env")
class TestSettings:
    """Test configuration settings."""

    def test_settings_defaults(self):
        settings = make_settings()

        assert settings.oauth_redirect_uri == "http://localhost:8002/oauth2callback"
        assert settings.log_level == "INFO"
        assert settings.log_to_file is False
        assert settings.oauth_manage is False
        assert settings.is_oauth_configured() is False

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("OAUTH_SERVICES", "gmail,tasks")
        monkeypatch.setenv("OAUTH_MANAGE", "true")

        settings = make_settings()
        assert settings.get_oauth_services() == [Service.GMAIL, Service.TASKS]
        assert settings.oauth_manage is True

    def test_default_services_are_user_services(self):
        assert make_settings().get_oauth_services() == user_services()

    def test_configured_services_are_parsed(self):
        settings = make_settings(oauth_services=" Docs , drive,")
        assert settings.get_oauth_services() == [Service.DOCS, Service.DRIVE]

    def test_unknown_configured_service(self):
        settings = make_settings(oauth_services="gmail,nope")
        with pytest.raises(UnknownServiceError):
            settings.get_oauth_services()

    def test_oauth_scopes(self):
        settings = make_settings(oauth_services="calendar")
        assert settings.get_oauth_scopes() == scopes_for_services([Service.CALENDAR])

    def test_oauth_scopes_with_manage(self):
        settings = make_settings(oauth_services="calendar", oauth_manage=True)
        for scope in IDENTITY_SCOPES:
            assert scope in settings.get_oauth_scopes()


@pytest.mark.usefixtures("clean_env")
class TestOAuthClientConfig:
    """Test OAuth client configuration loading."""

    def test_validate_incomplete_config(self):
        with pytest.raises(ValueError, match="incomplete"):
            make_settings().validate_oauth_config()

    def test_validate_missing_secrets_file(self, tmp_path):
        settings = make_settings(google_client_secrets_file=str(tmp_path / "missing.json"))
        with pytest.raises(ValueError, match="not found"):
            settings.validate_oauth_config()

    def test_client_config_from_credentials(self):
        settings = make_settings(google_client_id="id", google_client_secret="secret")
        settings.validate_oauth_config()

        config = settings.get_oauth_client_config()
        assert config["client_id"] == "id"
        assert config["client_secret"] == "secret"
        assert config["token_uri"] == GOOGLE_TOKEN_URI
        assert config["redirect_uris"] == ["http://localhost:8002/oauth2callback"]

    @pytest.mark.parametrize("client_type", ["web", "installed"])
    def test_client_config_from_secrets_file(self, tmp_path, client_type):
        secrets = tmp_path / "client_secret.json"
        secrets.write_text(json.dumps({
            client_type: {
                "client_id": "file-id",
                "client_secret": "file-secret",
                "redirect_uris": ["http://localhost:9000/cb"],
            }
        }))

        settings = make_settings(google_client_secrets_file=str(secrets))
        assert settings.is_oauth_configured()

        config = settings.get_oauth_client_config()
        assert config["client_id"] == "file-id"
        assert config["client_secret"] == "file-secret"
        assert config["auth_uri"] == settings.oauth_auth_uri
        assert config["redirect_uris"] == ["http://localhost:9000/cb"]

    def test_secrets_file_without_client_block(self, tmp_path):
        secrets = tmp_path / "client_secret.json"
        secrets.write_text(json.dumps({"other": {}}))

        with pytest.raises(ValueError, match="'web' or 'installed'"):
            make_settings(google_client_secrets_file=str(secrets)).get_oauth_client_config()

    def test_secrets_file_with_invalid_json(self, tmp_path):
        secrets = tmp_path / "client_secret.json"
        secrets.write_text("{not json")

        with pytest.raises(ValueError, match="Invalid JSON"):
            make_settings(google_client_secrets_file=str(secrets)).get_oauth_client_config()

    def test_missing_secrets_file(self, tmp_path):
        settings = make_settings(google_client_secrets_file=str(tmp_path / "missing.json"))
        with pytest.raises(FileNotFoundError):
            settings.get_oauth_client_config()
