import logging
from collections import Counter
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, List, Mapping, NamedTuple, Tuple

from defendant_census.errors import EmptyClassifiableSet
from defendant_census.normalizers import CATEGORY_ORDER, EthnicityCategory, NormalizedRecord
from defendant_census.settings import CENSUS_COUNTS

log = logging.getLogger(__name__)

Distribution = Mapping[EthnicityCategory, float]


class ReferencePopulation:
    """
    Fixed census counts per category. Built once, never mutated.
    Keys may be categories or their labels; missing categories count as 0.
    """
    def __init__(self, counts: Mapping):
        clean = {c: 0 for c in CATEGORY_ORDER}
        for key, value in counts.items():
            cat = key if isinstance(key, EthnicityCategory) else EthnicityCategory.from_label(key)
            n = int(value)
            if n < 0:
                raise ValueError(f"negative census count for {cat.value}: {n}")
            clean[cat] = n
        self._counts = MappingProxyType(clean)

    @classmethod
    def default(cls) -> "ReferencePopulation":
        return cls(CENSUS_COUNTS)

    @property
    def counts(self) -> Mapping[EthnicityCategory, int]:
        return self._counts

    @property
    def total(self) -> int:
        return sum(self._counts.values())

    def __getitem__(self, cat: EthnicityCategory) -> int:
        return self._counts[cat]

    def distribution(self) -> Distribution:
        total = self.total
        if total <= 0:
            raise ValueError("reference population is empty")
        return MappingProxyType({c: 100 * self._counts[c] / total for c in CATEGORY_ORDER})


class ComparisonRow(NamedTuple):
    category: EthnicityCategory
    count: int
    sample_pct: float
    reference_pct: float


@dataclass(frozen=True)
class Aggregation:
    counts: Mapping[EthnicityCategory, int]
    total: int
    sample_distribution: Distribution
    reference_distribution: Distribution
    categories: Tuple[EthnicityCategory, ...] = field(default=CATEGORY_ORDER)

    def rows(self) -> List[ComparisonRow]:
        """Category, count, sample %, reference %, in canonical order."""
        return [
            ComparisonRow(c, self.counts[c], self.sample_distribution[c], self.reference_distribution[c])
            for c in self.categories
        ]


def count_categories(records: Iterable[NormalizedRecord]) -> Tuple[Counter, int]:
    """Tally classifiable records. Returns (counts, rows seen)."""
    tally: Counter = Counter()
    seen = 0
    for r in records:
        seen += 1
        if r.ethnicity is not None:
            tally[r.ethnicity] += 1
    return tally, seen


def aggregate(records: Iterable[NormalizedRecord], reference: ReferencePopulation) -> Aggregation:
    """
    Reduce normalized rows to counts and two percentage distributions.
    Unclassifiable rows are left out of both numerator and denominator.
    Raises EmptyClassifiableSet when no row was classifiable.
    """
    tally, seen = count_categories(records)
    total = sum(tally.values())
    if total == 0:
        log.warning("no classifiable rows among %d", seen)
        raise EmptyClassifiableSet(seen)

    counts = MappingProxyType({c: tally.get(c, 0) for c in CATEGORY_ORDER})
    sample = MappingProxyType({c: 100 * counts[c] / total for c in CATEGORY_ORDER})
    log.info("aggregated %d classifiable of %d rows (%d skipped)", total, seen, seen - total)
    return Aggregation(
        counts=counts,
        total=total,
        sample_distribution=sample,
        reference_distribution=reference.distribution(),
    )
