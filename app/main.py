import logging
from typing import Optional, Union

from fastapi import FastAPI, UploadFile, File, HTTPException
from fastapi.responses import JSONResponse, PlainTextResponse

from .config import get_ingestion_settings
from .decoding import decode_ledger_bytes
from .ingest import IngestFailure, IngestResult, ingest
from .models import HealthResponse, IngestErrorResponse, IngestReport, IngestResponse
from .rules import TEMPLATE_FILENAME
from .samples import sample_ledger_csv, template_ledger_csv

settings = get_ingestion_settings()
logging.basicConfig(level=settings.log_level_value)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="ledger-ingest",
    description="Receivables aging ledger ingestion and risk classification",
    version="0.1.0",
)

INGEST_FAILURE_RESPONSES = {422: {"model": IngestErrorResponse}}


def _to_response(
    result: IngestResult, encoding: Optional[str] = None
) -> Union[IngestResponse, JSONResponse]:
    if isinstance(result, IngestFailure):
        body = IngestErrorResponse(code=result.code.value, message=result.message)
        return JSONResponse(status_code=422, content=body.model_dump())
    return IngestResponse(
        records=list(result.records),
        report=IngestReport(
            delimiter=result.delimiter,
            encoding=encoding,
            lines_read=result.lines_read,
            rows_accepted=len(result.records),
            rows_skipped=result.rows_skipped,
        ),
    )


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.post("/ingest", response_model=IngestResponse, responses=INGEST_FAILURE_RESPONSES)
async def ingest_ledger(file: UploadFile = File(...)):
    filename = (file.filename or "").lower()
    if not filename.endswith(settings.allowed_extensions):
        raise HTTPException(status_code=422, detail="Please upload a .csv or .txt file.")

    raw = await file.read()
    if len(raw) > settings.max_upload_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"File exceeds the {settings.max_upload_bytes} byte upload limit.",
        )

    text, encoding_report = decode_ledger_bytes(raw)
    logger.info("Ingesting %s (%d bytes, %s)", file.filename, len(raw), encoding_report["decode_used"])
    return _to_response(ingest(text), encoding=encoding_report["decode_used"])


@app.get("/sample", response_model=IngestResponse, responses=INGEST_FAILURE_RESPONSES)
def sample():
    return _to_response(ingest(sample_ledger_csv()), encoding="utf-8")


@app.get("/template", response_class=PlainTextResponse)
def template():
    return PlainTextResponse(
        template_ledger_csv(),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{TEMPLATE_FILENAME}"'},
    )
