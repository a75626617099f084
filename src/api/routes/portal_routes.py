"""
Portal routes - the customer-facing HTML page and its results fragment.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse

from api.dependencies import get_customer_source, get_portal_logger, get_summary_generator
from portal.search import SearchController
from portal.views import render_page, render_results

router = APIRouter()


@router.get(
    "/",
    response_class=HTMLResponse,
    summary="Customer portal page",
)
async def portal_page(
    dni: Optional[str] = Query(None, description="Run a search for this DNI before rendering"),
    source=Depends(get_customer_source),
    generator=Depends(get_summary_generator),
    logger=Depends(get_portal_logger),
):
    """
    Render the portal.

    Without ``dni`` the page shows the empty state. With ``dni`` (the form
    submitted without JavaScript) the search runs first and the page shows
    its result or error.
    """
    controller = SearchController(source, generator, logger=logger)
    if dni is not None:
        await controller.search(dni)
    return HTMLResponse(render_page(controller.state))


@router.get(
    "/search",
    response_class=HTMLResponse,
    summary="Search results fragment",
)
async def search_fragment(
    dni: str = Query("", description="National ID (DNI)"),
    request_id: Optional[int] = Query(None, description="Client request sequence number, echoed back"),
    source=Depends(get_customer_source),
    generator=Depends(get_summary_generator),
    logger=Depends(get_portal_logger),
):
    """Run a search and return only the results region HTML."""
    controller = SearchController(source, generator, logger=logger)
    state = await controller.search(dni)
    headers = {"X-Request-Id": str(request_id)} if request_id is not None else None
    return HTMLResponse(render_results(state), headers=headers)
