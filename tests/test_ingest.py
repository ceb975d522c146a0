import pytest
from sqlalchemy import func, select

from invoice_dashboard.db.schema import customers, invoices, revenue
from scripts.ingest import DATA_DIR, load_into_db, parse_amount, parse_seed_data


def write_csvs(tmp_path, invoice_rows):
    (tmp_path / "customers.csv").write_text(
        "id,name,email,image_url\n"
        "abc,Amy Burns,amy@burns.com,/customers/amy-burns.png\n"
    )
    (tmp_path / "invoices.csv").write_text("id,customer_id,amount,status,date\n" + invoice_rows)
    (tmp_path / "revenue.csv").write_text("month,revenue\nJan,2000\n")


def test_parse_amount_to_cents():
    assert parse_amount(" 157.95 ") == 15795
    assert parse_amount("12.34") == 1234


def test_parse_amount_rejects_values_too_large_to_store():
    with pytest.raises(ValueError, match="too large"):
        parse_amount("1e20")


def test_parse_seed_data_counts_bad_rows(tmp_path):
    write_csvs(
        tmp_path,
        "i1,abc,15.50,paid,2023-01-02\n"
        "i2,abc,not-money,paid,2023-01-02\n"
        "i3,abc,1.00,overdue,2023-01-02\n"
        "i4,abc,1.00,pending,yesterday\n",
    )

    customers_list, invoices_list, revenue_list, stats = parse_seed_data(tmp_path)

    assert len(customers_list) == 1
    assert [inv["id"] for inv in invoices_list] == ["i1"]
    assert invoices_list[0]["amount"] == 1550
    assert revenue_list == [{"month": "Jan", "revenue": 2000}]
    assert stats["n_rows"] == 6
    assert stats["n_errors"] == 3
    assert [ex["row_number"] for ex in stats["error_examples"]] == [2, 3, 4]


def test_load_into_db_is_idempotent(engine):
    customers_list, invoices_list, revenue_list, stats = parse_seed_data(DATA_DIR)
    assert stats["n_errors"] == 0

    load_into_db(customers_list, invoices_list, revenue_list, engine=engine)
    load_into_db(customers_list, invoices_list, revenue_list, engine=engine)

    with engine.connect() as conn:
        assert conn.execute(select(func.count()).select_from(customers)).scalar_one() == len(customers_list)
        assert conn.execute(select(func.count()).select_from(invoices)).scalar_one() == len(invoices_list)
        assert conn.execute(select(func.count()).select_from(revenue)).scalar_one() == 12
