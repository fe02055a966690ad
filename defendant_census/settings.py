# defendant_census/settings.py
import os
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]

# Where the yearly spreadsheets live, e.g. data/defendants_2025.xlsx
DATA_DIR = Path(os.getenv("DEFENDANTS_DATA_DIR", PROJECT_ROOT / "data"))
FILE_PATTERN = "defendants_{year}.xlsx"

# How many years to probe, counting the requested year itself.
#   1 -> only the requested year
#   3 -> requested year and the two before it
LOOKBACK_YEARS = max(1, int(os.getenv("DEFENDANTS_LOOKBACK_YEARS", "1")))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Dashboard
DASHBOARD_LAYOUT = os.getenv("DASHBOARD_LAYOUT", "split")  # split | combined
DASHBOARD_PORT = int(os.getenv("DASHBOARD_PORT", "8050"))

# Columns that may carry the ethnicity value, checked in order
ETHNICITY_COLUMNS = ("ethnicity", "race/ethnicity", "race_ethnicity")
RACE_COLUMNS = ("race",)

# County census counts per category
CENSUS_COUNTS = {
    "Hispanic or Latino": 153027,
    "White": 16813,
    "Black or African American": 4362,
    "Asian": 3049,
    "American Indian and Alaska Native": 4266,
    "Native Hawaiian and Other Pacific Islander": 165,
}

COLOR_MAP = {
    "Hispanic or Latino": "#f44336",
    "White": "#2196f3",
    "Black or African American": "#4caf50",
    "Asian": "#ff9800",
    "American Indian and Alaska Native": "#9c27b0",
    "Native Hawaiian and Other Pacific Islander": "#00bcd4",
}
