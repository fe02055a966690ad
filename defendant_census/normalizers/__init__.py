from .pipeline import get_default_normalizer, normalize, normalize_records, NormalizerPipeline
from .rules import RuleNormalizer, EthnicityRule, DEFAULT_RULES, classify
from .types import CATEGORY_ORDER, EthnicityCategory, NormalizedRecord, RawRecord
from .base import Normalizer

__all__ = [
    "get_default_normalizer",
    "normalize",
    "normalize_records",
    "NormalizerPipeline",
    "RuleNormalizer",
    "EthnicityRule",
    "DEFAULT_RULES",
    "classify",
    "CATEGORY_ORDER",
    "EthnicityCategory",
    "NormalizedRecord",
    "RawRecord",
    "Normalizer",
]
