# invoice_dashboard/main.py

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, RedirectResponse

from invoice_dashboard.api.customers import router as customers_router
from invoice_dashboard.api.dashboard import router as dashboard_router
from invoice_dashboard.api.invoices import router as invoices_router
from invoice_dashboard.api.revenue import router as revenue_router
from invoice_dashboard.core.errors import DataFetchError
from invoice_dashboard.core.logs import configure_logging
from invoice_dashboard.core.settings import get_settings

configure_logging()
logger = logging.getLogger(__name__)

settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    version=settings.api_version,
)


@app.exception_handler(DataFetchError)
def data_fetch_error_handler(request: Request, exc: DataFetchError) -> JSONResponse:
    logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": str(exc)})


@app.get("/health")
def health_check():
    return {"status": "ok"}


@app.get("/", include_in_schema=False)
def root():
    return RedirectResponse("/dashboard")


app.include_router(dashboard_router)
app.include_router(invoices_router)
app.include_router(customers_router)
app.include_router(revenue_router)
