"""
FastAPI Routes for the Lead Scraper API
Prompt parsing and lead scraping endpoints
"""

from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from lead_scraper.middlewares.trace_id_middleware import get_trace_id
from lead_scraper.models.lead_models import LeadQueryResult, SearchParameters
from lead_scraper.schemas.api_schemas import ErrorResponse, LeadsRequest
from lead_scraper.service.lead_search_service import LeadSearchService
from lead_scraper.utils.logging import setup_logger

logger = setup_logger(__name__)

router = APIRouter(prefix="/scraper", tags=["Scraper"])


@lru_cache
def get_lead_search_service() -> LeadSearchService:
    """Dependency to get the lead search service"""
    return LeadSearchService()


@router.get(
    "/details",
    response_model=SearchParameters,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}},
)
async def get_prompt_details(
    search: Optional[str] = Query(None, description="Free-text lead request"),
    service: LeadSearchService = Depends(get_lead_search_service),
    trace_id: str = Depends(get_trace_id),
):
    """
    Extract search parameters from a free-text request.

    Only the fields found in the text are returned.
    """
    if not search:
        return JSONResponse(
            status_code=400,
            content={"error": "Missing `search` query parameter."},
        )

    logger.info("Prompt details requested", extra={"trace_id": trace_id})
    return await service.get_prompt_details(search)


@router.post(
    "/leads",
    response_model=LeadQueryResult,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def get_scrapped_leads(
    request: Optional[LeadsRequest] = None,
    service: LeadSearchService = Depends(get_lead_search_service),
    trace_id: str = Depends(get_trace_id),
):
    """
    Scrape leads for an industry, position and place.

    - **industry**, **position**, **place**: required
    - **url**: optional search URL; generated from the fields when omitted

    A missing body is treated like an empty one.
    """
    request = request or LeadsRequest()
    params = SearchParameters(
        industry=request.industry,
        position=request.position,
        place=request.place,
    )
    logger.info(
        "Lead scrape requested",
        extra={"trace_id": trace_id, "custom_url": request.url is not None},
    )
    return await service.get_leads(params, url=request.url)
