"""
Customer routes - JSON search and status classification.
These call the same SearchController and classifier as the HTML portal.
"""
from typing import List, Optional, Dict, Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from api.dependencies import get_customer_source, get_portal_logger, get_summary_generator
from portal.search import SearchController
from tracker.status import classify

router = APIRouter()

# ── Pydantic models for request/response ──────────────────────────

class SearchRequest(BaseModel):
    """Look up a customer by DNI."""
    dni: str = Field("", description="National ID, with or without dots")


class SearchResponse(BaseModel):
    """Outcome of a search. ``error`` and ``customer`` are never both set."""
    phase: str
    request_id: int
    error: Optional[str] = None
    customer: Optional[Dict[str, Any]] = None
    summary: str = ""
    tracker: Optional[Dict[str, Any]] = None
    overall_status: Optional[str] = None


class ClassifyRequest(BaseModel):
    texts: List[Optional[str]] = Field(
        ...,
        description="Raw status cell values",
        examples=[["OK", "en tramite", "#N/A"]],
    )


class ClassifiedText(BaseModel):
    text: Optional[str] = None
    status: str


# ── Routes ────────────────────────────────────────────────────────

@router.post(
    "/search",
    response_model=SearchResponse,
    summary="Search a customer by DNI",
)
async def search_customer(
    body: SearchRequest,
    source=Depends(get_customer_source),
    generator=Depends(get_summary_generator),
    logger=Depends(get_portal_logger),
):
    """
    Look up the DNI, build the progress tracker and generate the summary.

    Failures are reported in the body (``phase == "error"``) with the same
    messages the portal shows, not as HTTP errors.
    """
    controller = SearchController(source, generator, logger=logger)
    state = await controller.search(body.dni)
    data = state.to_dict()
    data.pop("superseded", None)
    return SearchResponse(**data)


@router.post(
    "/status/classify",
    response_model=List[ClassifiedText],
    summary="Classify status cell values",
)
async def classify_statuses(body: ClassifyRequest):
    """Classify each text as pending, in-progress or completed."""
    return [ClassifiedText(text=text, status=classify(text).value) for text in body.texts]
