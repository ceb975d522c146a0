# scripts/ingest.py

import csv
import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path

from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from invoice_dashboard.core.logs import configure_logging
from invoice_dashboard.db.engine import get_engine
from invoice_dashboard.db.schema import customers, invoices, revenue
from invoice_dashboard.models.invoices import MAX_AMOUNT, to_cents

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent.parent / "data"

INVOICE_STATUSES = {"pending", "paid"}


# ---- Helpers ----

def parse_amount(value: str) -> int:
    """Dollar string from the CSV -> integer cents."""
    value = value.strip()
    try:
        amount = Decimal(value)
    except InvalidOperation:
        raise ValueError(f"invalid amount {value!r}") from None
    if amount < 0:
        raise ValueError(f"negative amount {value!r}")
    if amount > MAX_AMOUNT:
        raise ValueError(f"amount too large {value!r}")
    return to_cents(amount)


def parse_status(value: str) -> str:
    value = value.strip().lower()
    if value not in INVOICE_STATUSES:
        raise ValueError(f"invalid status {value!r}")
    return value


def _read_rows(file_path: Path, parse_row, stats: dict, key: str) -> list:
    parsed = []
    with open(file_path, newline="") as f:
        reader = csv.DictReader(f)

        for n_row, row in enumerate(reader, start=1):
            stats["n_rows"] += 1
            try:
                parsed.append(parse_row(row))
            except (KeyError, ValueError) as e:
                stats["n_errors"] += 1
                if len(stats["error_examples"]) < 5:
                    stats["error_examples"].append(
                        {
                            "file": file_path.name,
                            "row_number": n_row,
                            "row": dict(row),
                            "error": repr(e),
                        }
                    )

    stats[key] = len(parsed)
    return parsed


def parse_seed_data(data_dir: Path = DATA_DIR):
    stats = {"n_rows": 0, "n_errors": 0, "error_examples": []}

    customers_list = _read_rows(
        data_dir / "customers.csv",
        lambda row: {
            "id": row["id"].strip(),
            "name": row["name"].strip(),
            "email": row["email"].strip(),
            "image_url": row["image_url"].strip(),
        },
        stats,
        "n_customers",
    )

    invoices_list = _read_rows(
        data_dir / "invoices.csv",
        lambda row: {
            "id": row["id"].strip(),
            "customer_id": row["customer_id"].strip(),
            "amount": parse_amount(row["amount"]),
            "status": parse_status(row["status"]),
            "date": date.fromisoformat(row["date"].strip()),
        },
        stats,
        "n_invoices",
    )

    revenue_list = _read_rows(
        data_dir / "revenue.csv",
        lambda row: {"month": row["month"].strip(), "revenue": int(row["revenue"])},
        stats,
        "n_revenue",
    )

    return customers_list, invoices_list, revenue_list, stats


def upsert_rows(conn, table, rows: list) -> None:
    """
    Insert or update rows by primary key (idempotent seeding).
    """
    if not rows:
        return

    if conn.dialect.name == "postgresql":
        insert = postgresql_insert
    else:
        insert = sqlite_insert

    key_columns = [column.name for column in table.primary_key.columns]

    for row in rows:
        stmt = insert(table).values(**row)
        stmt = stmt.on_conflict_do_update(
            index_elements=key_columns,
            set_={name: stmt.excluded[name] for name in row if name not in key_columns},
        )
        conn.execute(stmt)


def load_into_db(customers_list, invoices_list, revenue_list, engine=None):
    engine = engine or get_engine()
    with engine.begin() as conn:
        upsert_rows(conn, customers, customers_list)
        upsert_rows(conn, invoices, invoices_list)
        upsert_rows(conn, revenue, revenue_list)


def main():
    configure_logging()
    customers_list, invoices_list, revenue_list, stats = parse_seed_data(DATA_DIR)
    load_into_db(customers_list, invoices_list, revenue_list)

    logger.info("Total CSV rows read:   %s", stats["n_rows"])
    logger.info("Customers loaded:      %s", stats["n_customers"])
    logger.info("Invoices loaded:       %s", stats["n_invoices"])
    logger.info("Revenue months loaded: %s", stats["n_revenue"])
    logger.info("Rows with errors:      %s", stats["n_errors"])

    if stats["error_examples"]:
        logger.warning("Example errors:")
        for ex in stats["error_examples"]:
            logger.warning("%s row %s: %s", ex["file"], ex["row_number"], ex["error"])


if __name__ == "__main__":
    main()
