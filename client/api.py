import os, requests
from dotenv import load_dotenv
load_dotenv()
API = os.getenv("API_BASE_URL", "http://localhost:8000")
S = requests.Session()

def healthz():    r=S.get(f"{API}/healthz",timeout=10); r.raise_for_status(); return r.json()
def categories(): r=S.get(f"{API}/categories",timeout=10); r.raise_for_status(); return r.json()
def ingest(rows, decimals=2):
    r = S.post(f"{API}/ingest", json=rows, params={"decimals": decimals}, timeout=60)
    r.raise_for_status()
    return r.json()

def upload(name: str, data: bytes, decimals=2):
    files = {"file": (name, data, "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet")}
    r = S.post(f"{API}/ingest/upload", files=files, params={"decimals": decimals}, timeout=120)
    r.raise_for_status()
    return r.json()

def comparison(year: int | None = None, decimals=2):
    params = {"decimals": decimals}
    if year:
        params["year"] = int(year)
    r = S.get(f"{API}/comparison", params=params, timeout=60)
    r.raise_for_status()
    return r.json()

def summary(index: int | None, year: int | None = None):
    params = {}
    if index is not None: params["index"] = int(index)
    if year: params["year"] = int(year)
    r=S.get(f"{API}/comparison/summary",params=params,timeout=30); r.raise_for_status(); return r.json()
