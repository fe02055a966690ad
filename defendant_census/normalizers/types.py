# defendant_census/normalizers/types.py
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class EthnicityCategory(str, Enum):
    """The six Census race/ethnicity buckets, in canonical display order."""
    WHITE = "White"
    BLACK = "Black or African American"
    ASIAN = "Asian"
    HISPANIC = "Hispanic or Latino"
    AIAN = "American Indian and Alaska Native"
    NHPI = "Native Hawaiian and Other Pacific Islander"

    @classmethod
    def from_label(cls, label: str) -> "EthnicityCategory":
        """Look up a category by its label. Raises ValueError for anything else."""
        return cls(label)


CATEGORY_ORDER: Tuple[EthnicityCategory, ...] = tuple(EthnicityCategory)

# One spreadsheet row: column name -> cell value ("" for blank cells)
RawRecord = Dict[str, Any]


@dataclass(frozen=True)
class NormalizedRecord:
    ethnicity: Optional[EthnicityCategory] = None

    @property
    def classifiable(self) -> bool:
        return self.ethnicity is not None
