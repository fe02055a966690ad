# defendant_census/schemas.py
from typing import List, Optional
from pydantic import BaseModel

from defendant_census.service import Comparison, ComparisonContext


class CategoryOut(BaseModel):
    category: str
    color: str
    census_count: int


class ComparisonRowOut(BaseModel):
    index: int
    category: str
    color: str
    defendants: int           # classified defendants in this category
    defendant_pct: float      # share of classified defendants
    census_pct: float         # share of the county population


class ComparisonOut(BaseModel):
    ok: bool = True
    year: Optional[int] = None
    source: Optional[str] = None    # file name, None for posted rows
    rows_seen: int
    classified: int
    skipped: int                    # rows with no recognizable ethnicity
    rows: List[ComparisonRowOut]


class SummaryOut(BaseModel):
    index: Optional[int] = None
    summary: str = ""


def comparison_out(c: Comparison, context: ComparisonContext, decimals: Optional[int] = None) -> ComparisonOut:
    def _r(x: float) -> float:
        return round(x, decimals) if decimals is not None else x

    agg = c.aggregation
    return ComparisonOut(
        year=c.year,
        source=c.source.path.name if c.source else None,
        rows_seen=c.rows_seen,
        classified=agg.total,
        skipped=c.skipped,
        rows=[
            ComparisonRowOut(
                index=i,
                category=row.category.value,
                color=context.colors[row.category],
                defendants=row.count,
                defendant_pct=_r(row.sample_pct),
                census_pct=_r(row.reference_pct),
            )
            for i, row in enumerate(agg.rows())
        ],
    )
