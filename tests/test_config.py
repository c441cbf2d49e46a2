import pytest

from account_server.config import DEFAULT_DATABASE_URL, load_settings
from account_server.core.errors import ConfigError


def test_defaults_only_need_a_secret():
    settings = load_settings({"JWT_SECRET": "s3cret"})
    assert settings.jwt_secret == "s3cret"
    assert settings.database_url == DEFAULT_DATABASE_URL
    assert settings.api_prefix == "/api/users"
    assert settings.port == 5000
    assert settings.token_expire_minutes == 60 * 24 * 30
    assert settings.cors_origins == ("https://minor-project-front.vercel.app",)


def test_missing_secret_is_rejected():
    with pytest.raises(ConfigError):
        load_settings({"JWT_SECRET": "  "})


def test_values_are_read_from_environment():
    settings = load_settings({
        "JWT_SECRET": "x",
        "DATABASE_URL": "sqlite:///./other.db",
        "PORT": "8080",
        "TOKEN_EXPIRE_MINUTES": "15",
        "API_PREFIX": "accounts/",
        "CORS_ORIGINS": "http://a.test, http://b.test,",
        "LOG_LEVEL": "debug",
    })
    assert settings.database_url == "sqlite:///./other.db"
    assert settings.port == 8080
    assert settings.token_expire_minutes == 15
    assert settings.api_prefix == "/accounts"
    assert settings.cors_origins == ("http://a.test", "http://b.test")
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("name", ["PORT", "TOKEN_EXPIRE_MINUTES"])
def test_bad_integers_are_rejected(name):
    with pytest.raises(ConfigError):
        load_settings({"JWT_SECRET": "x", name: "soon"})


def test_non_positive_expiry_is_rejected():
    with pytest.raises(ConfigError):
        load_settings({"JWT_SECRET": "x", "TOKEN_EXPIRE_MINUTES": "0"})
