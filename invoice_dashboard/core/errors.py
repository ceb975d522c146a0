# invoice_dashboard/core/errors.py


class DataFetchError(RuntimeError):
    """Raised by the query functions when the database read fails."""
