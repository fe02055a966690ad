import math
import re
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple
from .base import Normalizer
from .types import EthnicityCategory, NormalizedRecord, RawRecord
from defendant_census.settings import ETHNICITY_COLUMNS


@dataclass(frozen=True)
class EthnicityRule:
    substring: str
    category: EthnicityCategory


# Priority order matters: the first rule whose substring occurs wins.
DEFAULT_RULES: Tuple[EthnicityRule, ...] = (
    EthnicityRule("hispanic", EthnicityCategory.HISPANIC),
    EthnicityRule("latino", EthnicityCategory.HISPANIC),
    EthnicityRule("latina", EthnicityCategory.HISPANIC),
    EthnicityRule("latinx", EthnicityCategory.HISPANIC),
    EthnicityRule("black", EthnicityCategory.BLACK),
    EthnicityRule("african american", EthnicityCategory.BLACK),
    # plain substring: "caucasian" lands here too
    EthnicityRule("asian", EthnicityCategory.ASIAN),
    EthnicityRule("american indian", EthnicityCategory.AIAN),
    EthnicityRule("alaska", EthnicityCategory.AIAN),
    EthnicityRule("hawaiian", EthnicityCategory.NHPI),
    EthnicityRule("pacific", EthnicityCategory.NHPI),
    EthnicityRule("white", EthnicityCategory.WHITE),
)

# Removed before matching so "Non-Hispanic" does not read as Hispanic
_HISP = r"(?:hispanic|latino|latina|latinx)"
NEGATED_PHRASES = re.compile(
    rf"\b(?:non|not)\s*(?:of\s+)?{_HISP}(?:\s+(?:or\s+)?{_HISP})?\b"
)


class RuleNormalizer(Normalizer):
    """
    Rule-based ethnicity classifier:
    picks the first non-blank candidate column of a raw row and
    maps its free text onto a canonical category with a single
    first-match scan over an ordered rule list.
    """
    def __init__(
        self,
        rules: Sequence[EthnicityRule] = DEFAULT_RULES,
        fields: Sequence[str] = ETHNICITY_COLUMNS,
    ):
        self.rules = tuple(rules)
        self.fields = tuple(clean_text(f) for f in fields)

    def normalize(self, raw: RawRecord) -> NormalizedRecord:
        value = pick_field(raw, self.fields)
        return NormalizedRecord(ethnicity=classify(value, self.rules))


# --- Individual helpers (rule-based string cleanups) ---

def clean_text(s) -> str:
    """Lower-case and trim; runs of whitespace, "-", "_" and "/" become one space. None/NaN -> ""."""
    if s is None:
        return ""
    if isinstance(s, float) and math.isnan(s):
        return ""
    try:
        t = str(s)
    except Exception:
        return ""
    return re.sub(r"[\s_/-]+", " ", t.lower()).strip()

def strip_negations(t: str) -> str:
    """Drop phrases like "non-hispanic" / "not latino"."""
    return NEGATED_PHRASES.sub(" ", t)

def pick_field(raw: RawRecord, fields: Iterable[str]):
    """Return the first non-blank value among candidate columns (case-insensitive names)."""
    if not isinstance(raw, dict):
        return None
    by_name = {}
    for k, v in raw.items():
        by_name.setdefault(clean_text(k), v)
    for f in fields:
        v = by_name.get(f)
        if clean_text(v):
            return v
    return None

def classify(value, rules: Sequence[EthnicityRule] = DEFAULT_RULES) -> Optional[EthnicityCategory]:
    """First-match scan; None when the value is blank or nothing matches."""
    t = strip_negations(clean_text(value))
    if not t.strip():
        return None
    for rule in rules:
        if rule.substring in t:
            return rule.category
    return None
