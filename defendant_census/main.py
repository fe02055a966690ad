from contextlib import asynccontextmanager
from datetime import date
import logging
import os
from fastapi import FastAPI

from .routers.ingest import router as ingest_router
from .routers.read import router as read_router
from defendant_census import settings
from defendant_census.errors import ComparisonError
from defendant_census.service import get_context, load_comparison_async
from defendant_census.setup_logging import setup_logging

log = logging.getLogger(__name__)

# --------------------------------------------------------------------
# App bootstrap
# --------------------------------------------------------------------
setup_logging(settings.LOG_LEVEL) # Init Logging

# Flag to control whether the current year's file is loaded at startup
#   PRELOAD_CURRENT_YEAR=true  -> load once so /healthz can report problems early
#   PRELOAD_CURRENT_YEAR=false -> only load on request
PRELOAD_CURRENT_YEAR = os.getenv("PRELOAD_CURRENT_YEAR", "false").lower() in ("1", "true", "yes")

# --------------------------------------------------------------------
# FastAPI application with lifespan hook
# --------------------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context runs once at startup and once at shutdown.
    Optionally loads this year's defendants file so a missing or
    broken file shows up in /healthz before anyone asks for a chart.
    """
    app.state.load_error = None
    app.state.loaded_year = None

    if PRELOAD_CURRENT_YEAR:
        try:
            c = await load_comparison_async(get_context())
            app.state.loaded_year = c.year
        except ComparisonError as e:
            # Keep serving; the error is reported by /healthz and on each request
            log.warning("startup load failed: %s", e.message)
            app.state.load_error = e.message

    yield
    # No special shutdown logic needed

# Create the FastAPI app instance
app = FastAPI(title="Defendants vs County Census", lifespan=lifespan)

# --------------------------------------------------------------------
# Routes
# --------------------------------------------------------------------
@app.get("/healthz")
def health():
    """
    Simple health probe for monitoring.
    Returns:
      - ok: static True if the app is alive
      - data_dir: where yearly spreadsheets are looked up
      - current_year_file: True if this year's file exists
      - loaded_year / load_error: outcome of the optional startup load
    """
    current = settings.DATA_DIR / settings.FILE_PATTERN.format(year=date.today().year)
    return {
        "ok": True,
        "service": "defendant-census",
        "version": 1,
        "data_dir": str(settings.DATA_DIR),
        "current_year_file": current.is_file(),
        "loaded_year": getattr(app.state, "loaded_year", None),
        "load_error": getattr(app.state, "load_error", None),
    }

# Register API routers:
app.include_router(ingest_router)
app.include_router(read_router)
