import logging
from typing import Any, Dict, List, Optional
from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile

from defendant_census.errors import ComparisonError, status_code_for
from defendant_census.schemas import ComparisonOut, comparison_out
from defendant_census.service import ComparisonContext, build_comparison, get_context
from defendant_census.sources import decode_rows

log = logging.getLogger(__name__)

# --------------------------------------------------------------------
# Router setup
# --------------------------------------------------------------------
router = APIRouter(prefix="/ingest", tags=["ingest"])


def _is_row(item: Any) -> bool:
    """A raw row is a flat object of column -> scalar cell."""
    return isinstance(item, dict) and all(
        isinstance(v, (str, int, float, bool)) or v is None for v in item.values()
    )


@router.post("", response_model=ComparisonOut)
def ingest(
    payload: List[Dict[str, Any]],
    decimals: Optional[int] = Query(None, ge=0, le=6, description="Round percentages"),
    context: ComparisonContext = Depends(get_context),
):
    """
    Compare an ad-hoc batch of defendant rows against the census.

    Accepts:
        A JSON array of objects, one per spreadsheet row, e.g.
        [{"Name": "...", "Ethnicity": "Hispanic"}, ...]

    Returns:
        Counts and both percentage distributions in canonical
        category order (see ComparisonOut). Rows whose ethnicity
        can't be classified are counted in `skipped` only.
    """
    # Validate top-level structure
    if not payload:
        raise HTTPException(400, "Payload must be a non-empty JSON array")
    bad = [i for i, p in enumerate(payload) if not _is_row(p)]
    if bad:
        raise HTTPException(400, f"Rows must be flat objects (bad rows at {bad[:10]})")

    try:
        c = build_comparison(payload, context)
    except ComparisonError as e:
        raise HTTPException(status_code_for(e), e.message)
    return comparison_out(c, context, decimals)


@router.post("/upload", response_model=ComparisonOut)
async def ingest_upload(
    file: UploadFile = File(..., description="Defendants spreadsheet (.xlsx)"),
    decimals: Optional[int] = Query(None, ge=0, le=6),
    context: ComparisonContext = Depends(get_context),
):
    """Same as POST /ingest, but for an uploaded workbook (first sheet is used)."""
    buf = await file.read()
    log.info("upload %s (%d bytes)", file.filename, len(buf))
    try:
        rows = decode_rows(buf)
        c = build_comparison(rows, context)
    except ComparisonError as e:
        raise HTTPException(status_code_for(e), e.message)
    return comparison_out(c, context, decimals)
