# invoice_dashboard/core/settings.py

import os

from dotenv import load_dotenv

load_dotenv()

DEFAULT_DB_URL = "sqlite:///db.sqlite"  # file in project root


class Settings:
    def __init__(self):
        self.app_name = "Invoice Dashboard"
        self.api_version = "0.1.0"
        self.database_url = (
            os.getenv("POSTGRES_URL", "").strip()
            or os.getenv("DATABASE_URL", "").strip()
            or DEFAULT_DB_URL
        )
        self.db_sslmode = os.getenv("POSTGRES_SSLMODE", "require").strip()
        self.log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
        self.timezone = os.getenv("APP_TIMEZONE", "UTC").strip()


_settings_instance = None


def get_settings() -> Settings:
    """Return a singleton Settings instance, read once at process start."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
