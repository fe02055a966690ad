# tests/conftest.py
import io
import pandas as pd
import pytest
from fastapi.testclient import TestClient

from defendant_census.main import app
from defendant_census.service import ComparisonContext, get_context

YEAR = 2024

# Mixed-quality rows as they come out of a court export
SAMPLE_ROWS = [
    {"Case Number": "CR-1", "Defendant": "A", "Ethnicity": "Hispanic"},
    {"Case Number": "CR-2", "Defendant": "B", "Ethnicity": "HISPANIC"},
    {"Case Number": "CR-3", "Defendant": "C", "Ethnicity": "white "},
    {"Case Number": "CR-4", "Defendant": "D", "Ethnicity": "Unknown"},
    {"Case Number": "CR-5", "Defendant": "E", "Ethnicity": ""},
    {"Case Number": "CR-6", "Defendant": "F", "Ethnicity": "Asian"},
]


def xlsx_bytes(rows) -> bytes:
    buf = io.BytesIO()
    pd.DataFrame(rows).to_excel(buf, index=False)
    return buf.getvalue()


def write_xlsx(path, rows):
    path.write_bytes(xlsx_bytes(rows))
    return path


# --- Temporary data directory with one yearly file ---
@pytest.fixture
def data_dir(tmp_path_factory):
    path = tmp_path_factory.mktemp("data")
    write_xlsx(path / f"defendants_{YEAR}.xlsx", SAMPLE_ROWS)
    return path


@pytest.fixture
def context(data_dir):
    return ComparisonContext(data_dir=data_dir, lookback=1)


# --- Override the API's context dependency to use the temp data dir ---
@pytest.fixture(autouse=True)
def override_context(context):
    app.dependency_overrides[get_context] = lambda: context
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
