from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request
from pydantic import BaseModel

from inspection_finder.models import ALL, CityOption, FilterCriteria, InspectionRecord
from inspection_finder.services.board import InspectionBoard
from inspection_finder.services.pipeline import apply_criteria

router = APIRouter()


def get_board(request: Request) -> InspectionBoard:
    """Dependency returning the board created in the app lifespan."""
    return request.app.state.board


def get_criteria(
    search: str = Query("", description="Search name or address"),
    city: str = Query(ALL, description="Filter by city ('all' for every city)"),
    status: str = Query(ALL, description="Filter by status ('all' for every status)"),
    sort: Optional[str] = Query(None, description="score-desc, score-asc or name"),
    top10: bool = Query(False, description="Only show the first 10 results"),
) -> FilterCriteria:
    """Build filter criteria from the UI control values."""
    return FilterCriteria(search=search, city=city, status=status, sort=sort, top_only=top10)


class InspectionListResponse(BaseModel):
    """Filtered list response."""
    items: List[InspectionRecord]
    total: int


class ViewResponse(BaseModel):
    """Rendered results fragment for the page."""
    results_html: str
    summary: str
    count: int
    error: Optional[str] = None


@router.get("", response_model=InspectionListResponse)
async def list_inspections(
    criteria: FilterCriteria = Depends(get_criteria),
    board: InspectionBoard = Depends(get_board),
):
    """
    List inspections matching the search, city and status filters, in the requested order.
    """
    items = apply_criteria(board.records, criteria, top_n=board.settings.TOP_N)
    return InspectionListResponse(items=items, total=len(items))


@router.get("/cities", response_model=List[CityOption])
async def get_cities(board: InspectionBoard = Depends(get_board)):
    """City options for the city control, "All cities" first."""
    return board.city_options


@router.get("/view", response_model=ViewResponse)
async def get_view(
    criteria: FilterCriteria = Depends(get_criteria),
    board: InspectionBoard = Depends(get_board),
):
    """Re-run filter/sort and return the rendered cards and summary line."""
    rendered = board.render(criteria)
    return ViewResponse(
        results_html=rendered.results_html,
        summary=rendered.summary,
        count=rendered.count,
        error=board.error_message,
    )
