from typing import Iterable, List
from .base import Normalizer
from .types import NormalizedRecord, RawRecord
from .rules import RuleNormalizer
from defendant_census.settings import ETHNICITY_COLUMNS, RACE_COLUMNS

class NormalizerPipeline(Normalizer):
    """
    A chain of normalizers.
    Each stage gets the same raw row; the first stage that
    classifies it wins, later stages act as fallbacks.
    """
    def __init__(self, stages: List[Normalizer]):
        self.stages = stages

    def normalize(self, raw: RawRecord) -> NormalizedRecord:
        for stage in self.stages:
            out = stage.normalize(raw)
            if out.classifiable:
                return out
        return NormalizedRecord()

def get_default_normalizer() -> Normalizer:
    """
    Factory for the default pipeline.
    Ethnicity columns first, so a Hispanic row is Hispanic whatever its race;
    rows marked Non-Hispanic (or with no ethnicity column) fall back to race.
    """
    return NormalizerPipeline([
        RuleNormalizer(fields=ETHNICITY_COLUMNS),
        RuleNormalizer(fields=RACE_COLUMNS),
    ])

def normalize_records(rows: Iterable[RawRecord], normalizer: Normalizer | None = None) -> List[NormalizedRecord]:
    normalizer = normalizer or get_default_normalizer()
    return [normalizer.normalize(r) for r in rows]

def normalize(raw: RawRecord, normalizer: Normalizer | None = None) -> NormalizedRecord:
    """Classify a single row with the default pipeline (or the one given)."""
    return (normalizer or get_default_normalizer()).normalize(raw)
