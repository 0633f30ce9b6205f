"""HTTP API exposing college search, lookup and quota status."""

import hmac
import datetime as dt
from typing import Any, Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Query, status
from pydantic import BaseModel

from .config import settings
from .factory import build_client
from .records import CollegeSummary
from .scorecard_api import QUOTA_ERROR, CollegeLookup, ScorecardClient
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="college_scorecard/api")


def require_api_key(x_api_key: str | None = Header(default=None)):
    """
    Validate the X-API-Key header against the configured service key.
    """
    if not settings.service_api_key:
        logger.debug("No service API key configured; allowing all requests")
        return

    if not x_api_key:
        logger.debug("No API key provided")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing API key")

    if hmac.compare_digest(str(x_api_key), str(settings.service_api_key)):
        return

    logger.debug("Invalid API key provided")
    raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API key")


router = APIRouter(dependencies=[Depends(require_api_key)])
CLIENT: ScorecardClient = build_client(settings)


class CollegeRow(BaseModel):
    """Serialized search hit."""
    official_name: str
    city: str
    state: str
    type: str
    ipeds_id: Any = None
    website: str
    region: str


class SearchResponse(BaseModel):
    """Search hits with the strategy notes that produced them."""
    results: list[CollegeRow]
    notes: str
    quota_used: int


class LookupResponse(BaseModel):
    """Full record for one college."""
    data: dict
    notes: str
    quota_used: int


class QuotaResponse(BaseModel):
    """Quota usage snapshot."""
    daily_usage: int
    daily_limit: int
    remaining: int
    last_reset: dt.date
    execution_time_elapsed_ms: int


class ClearCacheResponse(BaseModel):
    cleared: bool


def _required_text(value: str, field_name: str) -> str:
    """Strip a query parameter and reject it if nothing but whitespace was sent."""
    stripped = value.strip()
    if not stripped:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=f"{field_name} must not be blank")
    return stripped


def _is_quota_note(notes: Optional[str]) -> bool:
    return bool(notes) and "quota_limit" in notes


@router.get("/colleges/search", response_model=SearchResponse)
def search(q: str = Query(..., min_length=1), state: str | None = None):
    """Search colleges by keyword, optionally filtered to a state."""
    result = CLIENT.search_colleges(_required_text(q, "q"), state)
    if result.error:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=result.error)
    if not result.ok:
        if _is_quota_note(result.notes):
            raise HTTPException(status_code=status.HTTP_429_TOO_MANY_REQUESTS, detail=result.notes)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"No matches found ({result.notes})")
    rows = [CollegeRow(**vars(CollegeSummary.from_record(r))) for r in result.results]
    return SearchResponse(results=rows, notes=result.notes, quota_used=result.quota_used)


@router.get("/colleges/lookup", response_model=LookupResponse)
def lookup(name: str = Query(..., min_length=1)):
    """Fetch the full field set for a college by its official name."""
    result: CollegeLookup = CLIENT.fetch_college_data(_required_text(name, "name"))
    if not result.ok:
        error = result.error or "Lookup failed"
        if error == QUOTA_ERROR:
            raise HTTPException(status_code=status.HTTP_429_TOO_MANY_REQUESTS, detail=error)
        if not result.notes:
            raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=error)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=error)
    return LookupResponse(data=result.data or {}, notes=result.notes, quota_used=result.quota_used)


@router.get("/quota", response_model=QuotaResponse)
def quota():
    """Return the current daily quota usage and execution-time budget."""
    return QuotaResponse(**vars(CLIENT.quota_status()))


@router.post("/cache/clear", response_model=ClearCacheResponse)
def clear_cache():
    """Drop cached API responses."""
    cleared = CLIENT.clear_cache()
    if not cleared:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Cache backend refused to clear")
    return ClearCacheResponse(cleared=True)
