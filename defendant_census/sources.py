"""
Spreadsheet discovery and decoding.

These are the only parts that touch the filesystem or parse workbook
bytes; everything downstream works on plain row dicts.
"""
import asyncio
import io
import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import List, Optional, Tuple

import pandas as pd

from defendant_census.errors import DecodeFailure, SourceNotFound
from defendant_census.normalizers import RawRecord
from defendant_census.settings import DATA_DIR, FILE_PATTERN, LOOKBACK_YEARS

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceFile:
    year: int
    path: Path


def candidate_paths(year: int, data_dir: Path, lookback: int) -> List[Tuple[int, Path]]:
    """Paths to probe, newest year first."""
    return [(y, Path(data_dir) / FILE_PATTERN.format(year=y)) for y in range(year, year - max(1, lookback), -1)]


def find_source(
    year: Optional[int] = None, data_dir: Path = DATA_DIR, lookback: int = LOOKBACK_YEARS
) -> SourceFile:
    """
    Resolve the defendants file for `year` (default: this year).
    With lookback > 1, earlier years are tried in turn.
    """
    year = year or date.today().year
    probed = []
    for y, path in candidate_paths(year, data_dir, lookback):
        log.debug("probing %s", path)
        if path.is_file():
            log.info("using defendants file %s", path)
            return SourceFile(year=y, path=path)
        probed.append(path.name)
    log.warning("no defendants file in %s for years %s", data_dir, probed)
    raise SourceNotFound(probed)


def read_source(source: SourceFile) -> bytes:
    return source.path.read_bytes()


def decode_rows(buffer: bytes) -> List[RawRecord]:
    """
    First sheet of an .xlsx workbook -> list of {column: str}.
    Blank cells come back as "", fully blank rows are dropped.
    """
    if not buffer:
        raise DecodeFailure("The defendants file is empty")
    try:
        sheets = pd.read_excel(io.BytesIO(buffer), sheet_name=None, dtype=str, engine="openpyxl")
    except Exception as e:  # openpyxl/zipfile raise a zoo of types for bad files
        log.warning("could not read workbook: %s", e)
        raise DecodeFailure(f"The defendants file is not a readable spreadsheet ({e})") from e

    if not sheets:
        raise DecodeFailure("The defendants file has no sheets")
    df = next(iter(sheets.values()))
    df = df.fillna("")
    df.columns = [str(c).strip() for c in df.columns]
    df = df[(df.apply(lambda col: col.str.strip()) != "").any(axis=1)] if len(df) else df
    if df.empty:
        raise DecodeFailure("The defendants file has no rows")

    rows = df.to_dict(orient="records")
    log.info("decoded %d row(s), columns=%s", len(rows), list(df.columns))
    return rows


def load_source_rows(
    year: Optional[int] = None, data_dir: Path = DATA_DIR, lookback: int = LOOKBACK_YEARS
) -> Tuple[SourceFile, List[RawRecord]]:
    source = find_source(year, data_dir=data_dir, lookback=lookback)
    return source, decode_rows(read_source(source))


async def load_source_rows_async(
    year: Optional[int] = None, data_dir: Path = DATA_DIR, lookback: int = LOOKBACK_YEARS
) -> Tuple[SourceFile, List[RawRecord]]:
    """Same as load_source_rows, off the event loop."""
    return await asyncio.to_thread(load_source_rows, year, data_dir, lookback)
