# defendant_census/errors.py
from typing import Iterable


class ComparisonError(Exception):
    """Base class for failures that abort a load. `message` is user-facing."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class SourceNotFound(ComparisonError):
    def __init__(self, probed: Iterable[str]):
        self.probed = list(probed)
        super().__init__(
            "No defendants file found (looked for: " + ", ".join(self.probed) + ")"
        )


class DecodeFailure(ComparisonError):
    """The source buffer is not a readable spreadsheet, or has no rows."""


class EmptyClassifiableSet(ComparisonError):
    def __init__(self, rows_seen: int = 0):
        self.rows_seen = rows_seen
        super().__init__(
            f"The file loaded but none of its {rows_seen} row(s) had a recognizable "
            "ethnicity, so there is nothing to compare"
        )


class RenderTargetMissing(ComparisonError):
    """A chart surface or the summary region was absent at bind time."""


# HTTP status per failure kind, for the API layer
STATUS_CODES = {
    SourceNotFound: 404,
    DecodeFailure: 422,
    EmptyClassifiableSet: 422,
    RenderTargetMissing: 500,
}


def status_code_for(e: ComparisonError) -> int:
    for kind, code in STATUS_CODES.items():
        if isinstance(e, kind):
            return code
    return 500
