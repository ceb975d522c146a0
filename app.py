# app.py
"""
Thin entrypoint for the dashboard.

Usage example:
    uvicorn app:app --reload
"""

from invoice_dashboard.main import app  # re-export FastAPI instance
