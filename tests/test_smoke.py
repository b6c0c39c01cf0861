from fastapi.testclient import TestClient
from app.main import app

client = TestClient(app)

HEADER = "companyname;capital_iq_ticker;revenue_latest;ebit_latest;ebitda_latest"


def test_health():
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"ok": True}


def test_generate_with_defaults():
    r = client.post("/generate", json={"text": "Apple Inc.\nMicrosoft\n"})
    assert r.status_code == 200

    data = r.json()
    assert data["row_count"] == 2
    assert data["period_mode"] == "IQ_FY"
    assert data["separator"] == ";"
    assert data["csv"].split("\r\n")[0] == HEADER
    assert data["preview"][1]["excel_row"] == 3
    assert data["preview"][0]["revenue_latest"] == '=CIQ(A2;"IQ_TOTAL_REV";IQ_FY)'
    assert data["preview_truncated"] is False


def test_generate_preview_is_limited():
    text = "\n".join(f"Company {i}" for i in range(25))
    data = client.post("/generate", json={"text": text}).json()
    assert data["row_count"] == 25
    assert len(data["preview"]) == 20
    assert data["preview_truncated"] is True


def test_treat_as_identifier_changes_nothing():
    body = {"text": "AAPL\nMSFT", "period_mode": "LTM", "separator": ","}
    plain = client.post("/generate", json=body).json()
    flagged = client.post("/generate", json={**body, "treat_as_identifier": True}).json()
    assert flagged["treat_as_identifier"] is True
    assert flagged["csv"] == plain["csv"]


def test_generate_rejects_unknown_mode():
    r = client.post("/generate", json={"text": "Apple", "period_mode": "IQ_CY"})
    assert r.status_code == 422


def test_raw_is_verbatim():
    r = client.post("/generate/raw", json={"text": "Apple\napple", "deduplicate": True, "separator": ","})
    assert r.status_code == 200
    assert r.text == HEADER + "\r\n" + 'Apple;"=CIQ(A2,""IQ_COMPANY_TICKER"")";"=CIQ(A2,""IQ_TOTAL_REV"",IQ_FY)";' \
        '"=CIQ(A2,""IQ_EBIT"",IQ_FY)";"=CIQ(A2,""IQ_EBITDA"",IQ_FY)"'


def test_download_has_bom_and_filename():
    r = client.post("/generate/download", json={"text": "Montréal Corp"})
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/csv")
    assert 'filename="capital_iq_output.csv"' in r.headers["content-disposition"]
    assert r.content.startswith(b"\xef\xbb\xbf")
    assert "Montréal Corp" in r.content.decode("utf-8-sig")


def test_upload_extracts_and_generates():
    raw = b"Company Name,ticker\nApple,AAPL\napple,AAPL\nSAP,SAP\n"
    files = {"file": ("companies.csv", raw, "text/csv")}
    r = client.post("/upload", files=files, data={"deduplicate": "true", "period_mode": "IQ_FQ"})
    assert r.status_code == 200

    data = r.json()
    assert data["extraction"]["names"] == ["Apple", "apple", "SAP"]
    assert data["extraction"]["warning"] is None
    assert data["result"]["row_count"] == 2
    assert data["result"]["preview"][1]["companyname"] == "SAP"
    assert data["result"]["preview"][1]["ebit_latest"] == '=CIQ(A3;"IQ_EBIT";IQ_FQ)'


def test_upload_fallback_warning():
    files = {"file": ("names.txt", b"name\nApple\n", "text/plain")}
    data = client.post("/upload", files=files).json()
    assert data["extraction"]["warning"].startswith('No "companyname" column found.')
    assert data["result"]["row_count"] == 1


def test_upload_rejects_other_extensions():
    files = {"file": ("companies.xlsx", b"whatever", "application/octet-stream")}
    r = client.post("/upload", files=files)
    assert r.status_code == 422
