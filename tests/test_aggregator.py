import random

import pytest

from defendant_census.aggregator import ReferencePopulation, aggregate
from defendant_census.errors import EmptyClassifiableSet
from defendant_census.normalizers import CATEGORY_ORDER, EthnicityCategory as E, NormalizedRecord, normalize_records


def _records(*cats):
    return [NormalizedRecord(c) for c in cats]


def test_scenario_from_raw_rows():
    rows = [{"Ethnicity": v} for v in ["Hispanic", "HISPANIC", "white ", "Unknown", ""]]
    ref = ReferencePopulation({"White": 100, "Hispanic or Latino": 50})
    agg = aggregate(normalize_records(rows), ref)

    assert agg.total == 3
    assert agg.counts[E.HISPANIC] == 2
    assert agg.counts[E.WHITE] == 1
    assert agg.sample_distribution[E.HISPANIC] == pytest.approx(66.6667, abs=1e-3)
    assert agg.sample_distribution[E.WHITE] == pytest.approx(33.3333, abs=1e-3)
    for c in (E.BLACK, E.ASIAN, E.AIAN, E.NHPI):
        assert agg.sample_distribution[c] == 0
        assert agg.reference_distribution[c] == 0
    assert agg.reference_distribution[E.WHITE] == pytest.approx(200 / 3)


def test_distributions_sum_to_100():
    agg = aggregate(_records(E.WHITE, E.BLACK, E.BLACK, E.NHPI, None, E.AIAN, E.ASIAN), ReferencePopulation.default())
    assert sum(agg.sample_distribution.values()) == pytest.approx(100, abs=1e-6)
    assert sum(agg.reference_distribution.values()) == pytest.approx(100, abs=1e-6)


def test_output_is_in_canonical_order():
    agg = aggregate(_records(E.NHPI, E.HISPANIC), ReferencePopulation.default())
    assert list(agg.counts) == list(CATEGORY_ORDER)
    assert list(agg.sample_distribution) == list(CATEGORY_ORDER)
    assert [r.category for r in agg.rows()] == list(CATEGORY_ORDER)


def test_order_independent():
    recs = _records(*([E.HISPANIC] * 7 + [E.WHITE] * 3 + [E.ASIAN] * 2 + [None] * 4))
    shuffled = list(recs)
    random.Random(42).shuffle(shuffled)
    ref = ReferencePopulation.default()
    a, b = aggregate(recs, ref), aggregate(shuffled, ref)
    assert dict(a.counts) == dict(b.counts)
    assert dict(a.sample_distribution) == dict(b.sample_distribution)
    assert a.rows() == b.rows()


def test_empty_classifiable_set():
    with pytest.raises(EmptyClassifiableSet) as exc:
        aggregate(_records(None, None), ReferencePopulation.default())
    assert exc.value.rows_seen == 2
    assert "recognizable" in exc.value.message

    with pytest.raises(EmptyClassifiableSet):
        aggregate([], ReferencePopulation.default())


def test_reference_population_validation():
    with pytest.raises(ValueError):
        ReferencePopulation({"Martian": 3})
    with pytest.raises(ValueError):
        ReferencePopulation({E.WHITE: -1})
    with pytest.raises(ValueError):
        aggregate(_records(E.WHITE), ReferencePopulation({}))


def test_reference_population_is_read_only():
    ref = ReferencePopulation.default()
    assert ref.total == 153027 + 16813 + 4362 + 3049 + 4266 + 165
    with pytest.raises(TypeError):
        ref.counts[E.WHITE] = 0
    aggregate(_records(E.WHITE), ref)
    assert ref[E.WHITE] == 16813
