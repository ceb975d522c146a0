import logging

from invoice_dashboard.core.logs import configure_logging
from invoice_dashboard.db.engine import get_engine
from invoice_dashboard.db.schema import metadata

logger = logging.getLogger(__name__)


def main():
    configure_logging()
    engine = get_engine()
    metadata.drop_all(engine)
    metadata.create_all(engine)
    logger.info("DB schema created at %s", engine.url.render_as_string(hide_password=True))


if __name__ == "__main__":
    main()
