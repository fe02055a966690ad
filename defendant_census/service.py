import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, Optional

from defendant_census import settings
from defendant_census.aggregator import Aggregation, ReferencePopulation, aggregate
from defendant_census.normalizers import (
    CATEGORY_ORDER, EthnicityCategory, Normalizer, RawRecord,
    get_default_normalizer, normalize_records,
)
from defendant_census.sources import SourceFile, load_source_rows, load_source_rows_async

log = logging.getLogger(__name__)


def default_colors() -> Dict[EthnicityCategory, str]:
    return {c: settings.COLOR_MAP[c.value] for c in CATEGORY_ORDER}


@dataclass
class ComparisonContext:
    """Everything one load needs, built once and passed down explicitly."""
    reference: ReferencePopulation = field(default_factory=ReferencePopulation.default)
    colors: Dict[EthnicityCategory, str] = field(default_factory=default_colors)
    normalizer: Normalizer = field(default_factory=get_default_normalizer)
    data_dir: Path = settings.DATA_DIR
    lookback: int = settings.LOOKBACK_YEARS


@dataclass(frozen=True)
class Comparison:
    aggregation: Aggregation
    rows_seen: int
    year: Optional[int] = None
    source: Optional[SourceFile] = None

    @property
    def skipped(self) -> int:
        return self.rows_seen - self.aggregation.total


def build_comparison(
    rows: Iterable[RawRecord], ctx: ComparisonContext, source: Optional[SourceFile] = None
) -> Comparison:
    """Normalize every row and aggregate. Errors propagate to the caller."""
    records = normalize_records(rows, ctx.normalizer)
    agg = aggregate(records, ctx.reference)
    return Comparison(
        aggregation=agg,
        rows_seen=len(records),
        year=source.year if source else None,
        source=source,
    )


def load_comparison(ctx: ComparisonContext, year: Optional[int] = None) -> Comparison:
    source, rows = load_source_rows(year, data_dir=ctx.data_dir, lookback=ctx.lookback)
    return build_comparison(rows, ctx, source)


async def load_comparison_async(ctx: ComparisonContext, year: Optional[int] = None) -> Comparison:
    source, rows = await load_source_rows_async(year, data_dir=ctx.data_dir, lookback=ctx.lookback)
    return build_comparison(rows, ctx, source)


def get_context() -> ComparisonContext:
    """FastAPI dependency: a fresh context per request."""
    return ComparisonContext(data_dir=settings.DATA_DIR, lookback=settings.LOOKBACK_YEARS)
