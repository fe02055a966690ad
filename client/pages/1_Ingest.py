import streamlit as st, random, requests, json, io
import pandas as pd
import api as API
from gen_data import gen_defendant_record
from components import show_json, show_comparison, error_detail

st.title("📥 Ingest")

# ------------------------
# Session state
# ------------------------
if "generated_records" not in st.session_state:
    st.session_state.generated_records = []

# ------------------------
# Controls
# ------------------------
col1, col2, col3 = st.columns(3)
with col1:
    total_n = st.number_input("Total records", 1, 50000, 500, key="ing_total")
with col2:
    seed = st.number_input("Random seed", 0, 999999, 0, key="ing_seed")
with col3:
    decimals = st.number_input("Decimals", 0, 6, 2, key="ing_decimals")

# ------------------------
# Helpers
# ------------------------
def _gen(n: int):
    if seed:
        random.seed(int(seed))
    return [gen_defendant_record() for _ in range(n)]

def _xlsx_bytes(records) -> bytes:
    buf = io.BytesIO()
    pd.DataFrame(records).to_excel(buf, index=False)
    return buf.getvalue()

# ------------------------
# Generate & Preview
# ------------------------
cA, cB, cC = st.columns(3)
with cA:
    if st.button("🎲 Generate dataset", key="btn_gen"):
        st.session_state.generated_records = _gen(total_n)
        st.success(f"Generated {len(st.session_state.generated_records)} defendant row(s).")
with cB:
    if st.button("Preview first 5 rows", key="btn_preview"):
        if not st.session_state.generated_records:
            st.info("No generated dataset yet — click **Generate dataset** first.")
        else:
            show_json(st.session_state.generated_records[:5], caption="Preview (first 5 rows)")
with cC:
    if st.session_state.generated_records:
        st.download_button(
            "⬇️ Download as .xlsx",
            data=_xlsx_bytes(st.session_state.generated_records),
            file_name="defendants_generated.xlsx",
        )

st.divider()

# ------------------------
# Ingest generated dataset
# ------------------------
if st.session_state.generated_records:
    if st.button("➡️ Compare generated dataset", key="btn_ingest_gen"):
        try:
            res = API.ingest(st.session_state.generated_records, decimals=int(decimals))
            show_comparison(res)
        except requests.HTTPError as e:
            st.error(f"HTTP error: {error_detail(e)}")
        except Exception as e:
            st.error(e)

st.divider()

# ------------------------
# Upload spreadsheet / paste JSON
# ------------------------
st.caption("Or upload a defendants spreadsheet, or paste a JSON array of rows")

cU, cP = st.columns(2)
with cU:
    up = st.file_uploader("Upload spreadsheet", type=["xlsx"], key="ing_upload")
    if up and st.button("POST uploaded spreadsheet", key="btn_upload_post"):
        try:
            show_comparison(API.upload(up.name, up.getvalue(), decimals=int(decimals)))
        except requests.HTTPError as e:
            st.error(error_detail(e))
        except Exception as e:
            st.error(e)

with cP:
    payload_text = st.text_area("Paste JSON array", height=180, key="ing_textarea",
                                placeholder='[{"Defendant":"Sam Lee","Ethnicity":"Asian"}, ...]')
    if st.button("POST pasted JSON", key="btn_paste_post"):
        try:
            show_comparison(API.ingest(json.loads(payload_text), decimals=int(decimals)))
        except requests.HTTPError as e:
            st.error(error_detail(e))
        except Exception as e:
            st.error(e)
