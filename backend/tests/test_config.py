import pytest

from calmtunes.config import Settings
from calmtunes.exceptions import UsageError


def test_defaults_from_empty_environment():
    settings = Settings.from_env({})
    assert settings.database_url is None
    assert settings.db_host == "localhost"
    assert settings.db_port == 5432
    assert settings.db_ssl_relaxed is True
    assert settings.basic_auth_enabled is False
    assert settings.admin_email == "admin@calmtunes.com"


def test_reads_connection_and_auth_variables():
    settings = Settings.from_env({
        "DATABASE_URL": "postgres://u:p@db.example.com/calm",
        "DB_SSL_RELAXED": "false",
        "BASIC_AUTH_ENABLED": "true",
        "BASIC_AUTH_USER": "staff",
        "BASIC_AUTH_PASS": "s3cret",
        "LOG_LEVEL": "debug",
    })
    assert settings.database_url == "postgres://u:p@db.example.com/calm"
    assert settings.db_ssl_relaxed is False
    assert settings.basic_auth_enabled is True
    assert (settings.basic_auth_user, settings.basic_auth_pass) == ("staff", "s3cret")
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("value", ["TRUE", "1", "yes", ""])
def test_basic_auth_only_enabled_by_exact_true(value):
    assert Settings.from_env({"BASIC_AUTH_ENABLED": value}).basic_auth_enabled is False


def test_invalid_port_is_a_usage_error():
    with pytest.raises(UsageError):
        Settings.from_env({"DB_PORT": "not-a-port"})
