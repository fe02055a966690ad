# client/pages/2_Compare.py
from datetime import date
import streamlit as st
import requests
import api as API
from components import show_comparison, error_detail, divider

st.title("📊 Compare")

c1, c2 = st.columns(2)
with c1:
    year = st.number_input("Year", 1900, 2200, date.today().year, key="cmp_year")
with c2:
    decimals = st.number_input("Decimals", 0, 6, 2, key="cmp_decimals")

if st.button("Load comparison", key="btn_load"):
    try:
        st.session_state.comparison = API.comparison(int(year), decimals=int(decimals))
    except requests.HTTPError as e:
        st.session_state.comparison = None
        st.error(error_detail(e))
    except Exception as e:
        st.session_state.comparison = None
        st.error(e)

res = st.session_state.get("comparison")
if res:
    show_comparison(res)
    divider("Category summary")
    labels = [r["category"] for r in res["rows"]]
    pick = st.selectbox("Category", labels, key="cmp_pick")
    try:
        out = API.summary(labels.index(pick), res.get("year"))
        st.markdown(f"**{out['summary']}**")
    except Exception as e:
        st.error(error_detail(e))
