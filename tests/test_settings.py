from invoice_dashboard.core.settings import DEFAULT_DB_URL, Settings, get_settings


def test_settings_singleton():
    assert get_settings() is get_settings()
    assert get_settings().app_name == "Invoice Dashboard"


def test_settings_defaults(monkeypatch):
    for name in ("POSTGRES_URL", "DATABASE_URL", "POSTGRES_SSLMODE", "LOG_LEVEL", "APP_TIMEZONE"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings()
    assert settings.database_url == DEFAULT_DB_URL
    assert settings.db_sslmode == "require"
    assert settings.log_level == "INFO"
    assert settings.timezone == "UTC"


def test_postgres_url_takes_precedence(monkeypatch):
    monkeypatch.setenv("POSTGRES_URL", "postgresql://user:pw@db.internal/invoices")
    monkeypatch.setenv("DATABASE_URL", "sqlite:///other.sqlite")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = Settings()
    assert settings.database_url == "postgresql://user:pw@db.internal/invoices"
    assert settings.log_level == "DEBUG"


def test_database_url_fallback(monkeypatch):
    monkeypatch.delenv("POSTGRES_URL", raising=False)
    monkeypatch.setenv("DATABASE_URL", "sqlite:///other.sqlite")
    assert Settings().database_url == "sqlite:///other.sqlite"
