from conftest import SAMPLE_ROWS, xlsx_bytes

SCENARIO = [{"Ethnicity": v} for v in ["Hispanic", "HISPANIC", "white ", "Unknown", ""]]


def test_ingest_scenario(client):
    r = client.post("/ingest", json=SCENARIO, params={"decimals": 2})
    assert r.status_code == 200, r.text
    p = r.json()
    assert p["ok"] is True
    assert p["year"] is None and p["source"] is None
    assert (p["rows_seen"], p["classified"], p["skipped"]) == (5, 3, 2)

    rows = {row["category"]: row for row in p["rows"]}
    assert [row["category"] for row in p["rows"]][0] == "White"
    assert rows["Hispanic or Latino"]["defendants"] == 2
    assert rows["Hispanic or Latino"]["defendant_pct"] == 66.67
    assert rows["White"]["defendant_pct"] == 33.33
    assert rows["Asian"]["defendant_pct"] == 0
    assert abs(sum(row["census_pct"] for row in p["rows"]) - 100) < 0.05


def test_ingest_rejects_empty_payload(client):
    r = client.post("/ingest", json=[])
    assert r.status_code == 400


def test_ingest_rejects_nested_rows(client):
    r = client.post("/ingest", json=[{"Ethnicity": {"nested": True}}])
    assert r.status_code == 400


def test_ingest_nothing_classifiable(client):
    r = client.post("/ingest", json=[{"Ethnicity": "Unknown"}, {"Ethnicity": ""}])
    assert r.status_code == 422
    assert "recognizable" in r.json()["detail"]


def test_upload_spreadsheet(client):
    files = {"file": ("defendants.xlsx", xlsx_bytes(SAMPLE_ROWS))}
    r = client.post("/ingest/upload", files=files)
    assert r.status_code == 200, r.text
    p = r.json()
    assert (p["rows_seen"], p["classified"], p["skipped"]) == (6, 4, 2)


def test_upload_garbage(client):
    files = {"file": ("defendants.xlsx", b"this is not a workbook")}
    r = client.post("/ingest/upload", files=files)
    assert r.status_code == 422
