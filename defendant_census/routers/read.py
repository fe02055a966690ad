from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query

from defendant_census.comparator import InteractiveComparator
from defendant_census.errors import ComparisonError, status_code_for
from defendant_census.normalizers import CATEGORY_ORDER
from defendant_census.schemas import CategoryOut, ComparisonOut, SummaryOut, comparison_out
from defendant_census.service import Comparison, ComparisonContext, get_context, load_comparison_async

router = APIRouter(prefix="", tags=["read"])


async def _load(context: ComparisonContext, year: Optional[int]) -> Comparison:
    """Load the yearly file; every failure becomes one HTTP error."""
    try:
        return await load_comparison_async(context, year)
    except ComparisonError as e:
        raise HTTPException(status_code_for(e), e.message)


@router.get("/categories", response_model=List[CategoryOut])
def list_categories(context: ComparisonContext = Depends(get_context)):
    """The six canonical categories in display order, with color and census count."""
    return [
        CategoryOut(category=c.value, color=context.colors[c], census_count=context.reference[c])
        for c in CATEGORY_ORDER
    ]


@router.get("/comparison", response_model=ComparisonOut)
async def get_comparison(
    year: Optional[int] = Query(None, ge=1900, le=2200, description="Defaults to the current year"),
    decimals: Optional[int] = Query(None, ge=0, le=6, description="Round percentages"),
    context: ComparisonContext = Depends(get_context),
):
    """
    Load defendants_<year>.xlsx from the data directory and compare it
    against the county census.

    - 404 when no file exists for the probed year(s)
    - 422 when the file can't be decoded or has no classifiable rows
    """
    c = await _load(context, year)
    return comparison_out(c, context, decimals)


@router.get("/comparison/summary", response_model=SummaryOut)
async def get_summary(
    index: Optional[int] = Query(None, description="Category index; omit for empty space"),
    year: Optional[int] = Query(None, ge=1900, le=2200),
    context: ComparisonContext = Depends(get_context),
):
    """The summary line the dashboard shows while hovering category `index`."""
    c = await _load(context, year)
    comparator = InteractiveComparator.from_aggregation(c.aggregation, context.colors, [], None)
    text = comparator.summary_for(index)
    return SummaryOut(index=comparator.resolve_index(index), summary=text or "")
