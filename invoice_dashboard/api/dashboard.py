# invoice_dashboard/api/dashboard.py
"""
Server-rendered dashboard pages and the invoice form submissions.
"""

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Form, HTTPException, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.engine import Engine
from starlette.concurrency import run_in_threadpool

from invoice_dashboard.core.cache import PageCache, get_page_cache
from invoice_dashboard.db.engine import get_engine
from invoice_dashboard.db.queries import (
    fetch_card_data,
    fetch_customers,
    fetch_filtered_customers,
    fetch_filtered_invoices,
    fetch_invoice_by_id,
    fetch_invoices_pages,
    fetch_latest_invoices,
    fetch_revenue,
)
from invoice_dashboard.lib.utils import (
    GAP,
    format_currency,
    format_date_to_local,
    generate_pagination,
    generate_y_axis,
)
from invoice_dashboard.models.invoices import FormState
from invoice_dashboard.services.actions import (
    INVOICES_PATH,
    create_invoice,
    delete_invoice,
    update_invoice,
)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["currency"] = format_currency
templates.env.filters["local_date"] = format_date_to_local

router = APIRouter(prefix="/dashboard", tags=["pages"], default_response_class=HTMLResponse)


def see_other(url: str) -> RedirectResponse:
    return RedirectResponse(url, status_code=303)


def _page_links(query: str, current_page: int, total_pages: int) -> List[Dict[str, Any]]:
    links = []
    for page in generate_pagination(current_page, total_pages):
        if page == GAP:
            links.append({"label": GAP, "url": None, "current": False})
            continue
        links.append(
            {
                "label": str(page),
                "url": f"{INVOICES_PATH}?{urlencode({'query': query, 'page': page})}",
                "current": page == current_page,
            }
        )
    return links


def _render_invoices(request: Request, engine: Engine, query: str, page: int) -> str:
    total_pages = fetch_invoices_pages(engine, query)
    rows = fetch_filtered_invoices(engine, query, page)

    return templates.get_template("invoices/list.html").render(
        request=request,
        query=query,
        invoices=rows,
        page=page,
        total_pages=total_pages,
        page_links=_page_links(query, page, total_pages),
        prev_url=f"{INVOICES_PATH}?{urlencode({'query': query, 'page': page - 1})}" if page > 1 else None,
        next_url=f"{INVOICES_PATH}?{urlencode({'query': query, 'page': page + 1})}" if page < total_pages else None,
    )


def _invoice_form_response(
    request: Request,
    engine: Engine,
    *,
    title: str,
    action_url: str,
    submit_label: str,
    values: Mapping[str, Optional[str]],
    state: Optional[FormState] = None,
    status_code: int = 200,
) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "invoices/form.html",
        {
            "title": title,
            "action_url": action_url,
            "submit_label": submit_label,
            "customers": fetch_customers(engine),
            "values": values,
            "state": state or FormState(),
        },
        status_code=status_code,
    )


def _failure_status(state: FormState) -> int:
    # Field errors are the user's to fix; a bare message means the write failed
    return 422 if state.errors else 500


@router.get("")
async def overview(request: Request, engine: Engine = Depends(get_engine)):
    card_data = await fetch_card_data(engine)
    revenue = await run_in_threadpool(fetch_revenue, engine)
    latest_invoices = await run_in_threadpool(fetch_latest_invoices, engine)
    y_axis_labels, top_label = generate_y_axis(revenue)

    return templates.TemplateResponse(
        request,
        "dashboard/overview.html",
        {
            "cards": card_data,
            "revenue": revenue,
            "y_axis_labels": y_axis_labels,
            "top_label": top_label,
            "latest_invoices": latest_invoices,
        },
    )


@router.get("/invoices")
def invoices_page(
    request: Request,
    query: str = Query(""),
    page: int = Query(1, ge=1),
    engine: Engine = Depends(get_engine),
    cache: PageCache = Depends(get_page_cache),
):
    key = (INVOICES_PATH, urlencode({"query": query, "page": page}))
    html = cache.get(key)
    if html is None:
        html = _render_invoices(request, engine, query, page)
        cache.set(key, html)
    return HTMLResponse(html)


@router.get("/invoices/create")
def create_invoice_page(request: Request, engine: Engine = Depends(get_engine)):
    return _invoice_form_response(
        request,
        engine,
        title="Create Invoice",
        action_url=f"{INVOICES_PATH}/create",
        submit_label="Create Invoice",
        values={},
    )


@router.post("/invoices/create")
def create_invoice_submit(
    request: Request,
    customer_id: Optional[str] = Form(None, alias="customerId"),
    amount: Optional[str] = Form(None),
    status: Optional[str] = Form(None),
    engine: Engine = Depends(get_engine),
    cache: PageCache = Depends(get_page_cache),
):
    values = {"customerId": customer_id, "amount": amount, "status": status}
    result = create_invoice(
        engine,
        values,
        revalidate_path=cache.revalidate_path,
        redirect=see_other,
    )
    if isinstance(result, FormState):
        return _invoice_form_response(
            request,
            engine,
            title="Create Invoice",
            action_url=f"{INVOICES_PATH}/create",
            submit_label="Create Invoice",
            values=values,
            state=result,
            status_code=_failure_status(result),
        )
    return result


@router.get("/invoices/{invoice_id}/edit")
def edit_invoice_page(
    request: Request,
    invoice_id: str,
    engine: Engine = Depends(get_engine),
):
    invoice = fetch_invoice_by_id(engine, invoice_id)
    if invoice is None:
        raise HTTPException(status_code=404, detail="Invoice not found")

    return _invoice_form_response(
        request,
        engine,
        title="Edit Invoice",
        action_url=f"{INVOICES_PATH}/{invoice_id}/edit",
        submit_label="Edit Invoice",
        values={
            "customerId": invoice.customer_id,
            "amount": f"{invoice.amount:.2f}",
            "status": invoice.status,
        },
    )


@router.post("/invoices/{invoice_id}/edit")
def edit_invoice_submit(
    request: Request,
    invoice_id: str,
    customer_id: Optional[str] = Form(None, alias="customerId"),
    amount: Optional[str] = Form(None),
    status: Optional[str] = Form(None),
    engine: Engine = Depends(get_engine),
    cache: PageCache = Depends(get_page_cache),
):
    values = {"customerId": customer_id, "amount": amount, "status": status}
    result = update_invoice(
        engine,
        invoice_id,
        values,
        revalidate_path=cache.revalidate_path,
        redirect=see_other,
    )
    if isinstance(result, FormState):
        return _invoice_form_response(
            request,
            engine,
            title="Edit Invoice",
            action_url=f"{INVOICES_PATH}/{invoice_id}/edit",
            submit_label="Edit Invoice",
            values=values,
            state=result,
            status_code=_failure_status(result),
        )
    return result


@router.post("/invoices/{invoice_id}/delete")
def delete_invoice_submit(
    request: Request,
    invoice_id: str,
    engine: Engine = Depends(get_engine),
    cache: PageCache = Depends(get_page_cache),
):
    delete_invoice(engine, invoice_id, revalidate_path=cache.revalidate_path)
    # No redirect: the listing is rendered fresh in place
    return HTMLResponse(_render_invoices(request, engine, "", 1))


@router.get("/customers")
def customers_page(
    request: Request,
    query: str = Query(""),
    engine: Engine = Depends(get_engine),
):
    return templates.TemplateResponse(
        request,
        "customers/list.html",
        {"query": query, "customers": fetch_filtered_customers(engine, query)},
    )
