# defendant_census/normalizers/base.py
from typing import Protocol
from .types import NormalizedRecord, RawRecord

class Normalizer(Protocol):
    def normalize(self, raw: RawRecord) -> NormalizedRecord:
        """Classify one raw row. Never raises; unclassifiable rows get ethnicity=None."""
        ...
