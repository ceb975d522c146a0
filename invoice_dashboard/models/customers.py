# invoice_dashboard/models/customers.py

from pydantic import BaseModel


class CustomerField(BaseModel):
    id: str
    name: str


class CustomersTableRow(BaseModel):
    id: str
    name: str
    email: str
    image_url: str
    total_invoices: int
    total_pending: str
    total_paid: str
