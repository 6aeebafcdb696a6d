from fastapi.testclient import TestClient
from app.main import app

client = TestClient(app)

def test_health():
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"ok": True}

def test_ingest_comma_ledger():
    raw = (
        "Customer Name,Total Balance,Aging Days,Invoice Date\r\n"
        "PT. Maju Jaya,150000000,15,2023-10-01\r\n"
        "Local Trader,-1500000,30,2023-09-15\r\n"
    ).encode("utf-8")

    files = {"file": ("ledger.csv", raw, "text/csv")}
    r = client.post("/ingest", files=files)
    assert r.status_code == 200

    data = r.json()
    assert [rec["id"] for rec in data["records"]] == ["REC-1", "REC-2"]
    first = data["records"][0]
    assert first["customerName"] == "PT. Maju Jaya"
    assert first["totalBalance"] == 150000000
    assert first["agingDays"] == 15
    assert first["status"] == "Current"
    assert first["invoiceDate"] == "2023-10-01"
    assert data["report"]["delimiter"] == ","
    assert data["report"]["rowsAccepted"] == 2

def test_ingest_latin1_semicolon_ledger():
    # Latin-1 bytes force the charset-normalizer path
    raw = "Nama;Saldo;Umur;Tanggal\nCafé Montréal;Rp 1.250.000,50;95 hari;2023-07-01\n".encode("latin-1")

    r = client.post("/ingest", files={"file": ("kkp.txt", raw, "text/plain")})
    assert r.status_code == 200

    data = r.json()
    rec = data["records"][0]
    assert "Montr" in rec["customerName"]
    assert rec["totalBalance"] == 1250000.50
    assert rec["agingDays"] == 95
    assert rec["status"] == "Impaired"
    assert data["report"]["delimiter"] == ";"

def test_ingest_rejects_other_file_types():
    r = client.post("/ingest", files={"file": ("ledger.xlsx", b"x", "application/octet-stream")})
    assert r.status_code == 422

def test_ingest_rejects_oversized_upload(monkeypatch):
    from app import main
    from app.config import IngestionSettings

    monkeypatch.setattr(main, "settings", IngestionSettings(max_upload_bytes=10))
    r = client.post("/ingest", files={"file": ("ledger.csv", b"a,b\nc,1\n" * 5, "text/csv")})
    assert r.status_code == 413

def test_ingest_header_only_is_empty_input():
    r = client.post("/ingest", files={"file": ("ledger.csv", b"Customer Name,Total Balance", "text/csv")})
    assert r.status_code == 422
    assert r.json()["code"] == "empty_input"

def test_ingest_without_valid_rows():
    raw = b"Customer Name,Total Balance\nAlpha,n/a\nBeta\n"
    r = client.post("/ingest", files={"file": ("ledger.csv", raw, "text/csv")})
    assert r.status_code == 422
    assert r.json() == {
        "code": "no_valid_records",
        "message": "No valid records found. Please check your CSV format (Name, Balance, Aging, Date).",
    }

def test_sample_endpoint():
    r = client.get("/sample")
    assert r.status_code == 200
    statuses = [rec["status"] for rec in r.json()["records"]]
    assert statuses == [
        "Current", "Overdue", "Impaired", "Current",
        "Impaired", "Current", "Current", "Impaired",
    ]

def test_template_download():
    r = client.get("/template")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/csv")
    assert "template_kertas_kerja_audit.csv" in r.headers["content-disposition"]
    assert r.text.splitlines()[0] == "Customer Name,Total Balance,Aging Days,Invoice Date"
    assert len(r.text.splitlines()) == 5

def test_ingest_oversized_aging_keeps_rows():
    raw = ("Name,Balance,Aging\nA,100," + "9" * 5000 + "\nB,200,10").encode("utf-8")
    r = client.post("/ingest", files={"file": ("ledger.csv", raw, "text/csv")})
    assert r.status_code == 200
    assert [rec["agingDays"] for rec in r.json()["records"]] == [0, 10]
