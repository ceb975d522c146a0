# invoice_dashboard/db/engine.py

from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url

from invoice_dashboard.core.settings import get_settings


@lru_cache
def get_engine() -> Engine:
    settings = get_settings()
    url = make_url(settings.database_url)

    connect_args = {}
    if url.get_backend_name() == "postgresql":
        # Encrypted connection unless POSTGRES_SSLMODE says otherwise
        connect_args["sslmode"] = settings.db_sslmode

    return create_engine(url, future=True, pool_pre_ping=True, connect_args=connect_args)
