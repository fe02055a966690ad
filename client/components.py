# client/components.py
import streamlit as st
import pandas as pd

def show_json(obj, caption: str | None = None):
    if caption:
        st.caption(caption)
    st.json(obj)

def error_detail(e: Exception) -> str:
    """Pull FastAPI's {"detail": ...} out of an HTTP error when there is one."""
    resp = getattr(e, "response", None)
    if resp is not None:
        try:
            return str(resp.json().get("detail", resp.text))
        except ValueError:
            return resp.text[:400]
    return str(e)

def show_comparison(res: dict):
    """Render a /comparison or /ingest response: headline numbers, table, bar chart."""
    c1, c2, c3 = st.columns(3)
    c1.metric("Rows", res["rows_seen"])
    c2.metric("Classified", res["classified"])
    c3.metric("Skipped", res["skipped"])
    if res.get("source"):
        st.caption(f"Source: {res['source']}")

    df = pd.DataFrame(res["rows"]).set_index("category")
    st.dataframe(df[["defendants", "defendant_pct", "census_pct"]])
    st.bar_chart(df[["defendant_pct", "census_pct"]])

def divider(label: str = ""):
    st.markdown(f"---\n**{label}**" if label else "---")
