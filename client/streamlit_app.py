# client/streamlit_app.py
import os
import requests
import streamlit as st

st.set_page_config(page_title="Defendants vs Census", layout="wide")
st.title("⚖️ Defendants vs County Census")

st.markdown("""
This is the home page.

Use the **sidebar Pages** to open:
- **📥 Ingest** — Generate synthetic defendant rows or upload a defendants spreadsheet and POST it to `/ingest`. Shows how many rows were classified or skipped.
- **📊 Compare** — Load `defendants_<year>.xlsx` from the server's data directory via `/comparison` and compare it with the county census.

For the interactive hover chart run `defendant-census-dashboard`.
""")

with st.sidebar:
    st.header("Settings")
    api_url = os.getenv("API_BASE_URL", "http://localhost:8000")
    st.text_input("API Base URL (from env)", value=api_url, disabled=True)
    if st.button("Health check"):
        try:
            r = requests.get(f"{api_url}/healthz", timeout=5)
            st.success(r.json())
        except Exception as e:
            st.error(f"Health check failed: {e}")

st.info("Tip: set `API_BASE_URL` in `client/.env` or export it before running `streamlit run client/streamlit_app.py`.")
