# load_data.py
"""
Create the schema (if missing) and load the seed CSVs under data/.

Usage:
    python load_data.py
"""

from invoice_dashboard.db.engine import get_engine
from invoice_dashboard.db.schema import metadata
from scripts.ingest import main as ingest


def main():
    metadata.create_all(get_engine())
    ingest()


if __name__ == "__main__":
    main()
