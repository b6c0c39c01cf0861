import logging
from typing import Optional

from fastapi import FastAPI, UploadFile, File, Form, HTTPException
from fastapi.responses import PlainTextResponse, Response

from .config import settings
from .csv_builder import build_rows, encode_csv_download, generate_csv_from_text, serialize_csv
from .formulas import PeriodMode, Separator
from .models import GenerateRequest, GenerateResponse, HealthResponse, UploadResponse
from .names import deduplicate_names, parse_names
from .rules import ALLOWED_UPLOAD_EXTENSIONS
from .upload import extract_company_names

logger = logging.getLogger(__name__)

app = FastAPI(
    title="ciq-csv-generator",
    description="Semicolon-delimited CSV files with Capital IQ add-in formulas",
    version="0.1.0",
)


def _generate(names, req: GenerateRequest) -> GenerateResponse:
    rows = build_rows(names, req.period_mode, req.separator)
    limit = settings.preview_limit
    return GenerateResponse(
        csv=serialize_csv(rows),
        row_count=len(rows),
        preview=rows[:limit],
        preview_truncated=len(rows) > limit,
        period_mode=req.period_mode,
        separator=req.separator,
        deduplicate=req.deduplicate,
        treat_as_identifier=req.treat_as_identifier,
    )


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.post("/generate", response_model=GenerateResponse)
def generate(req: GenerateRequest):
    names = parse_names(req.text, req.deduplicate)
    logger.info(
        "Generating %d rows (mode=%s, sep=%r)", len(names), req.period_mode.value, req.separator.value
    )
    return _generate(names, req)


@app.post("/generate/raw", response_class=PlainTextResponse)
def generate_raw(req: GenerateRequest):
    csv_text = generate_csv_from_text(req.text, req.period_mode, req.separator, req.deduplicate)
    return PlainTextResponse(csv_text)


@app.post("/generate/download")
def generate_download(req: GenerateRequest):
    names = parse_names(req.text, req.deduplicate)
    csv_text = serialize_csv(build_rows(names, req.period_mode, req.separator))
    logger.info("Download of %d rows as %s", len(names), settings.download_filename)
    return Response(
        content=encode_csv_download(csv_text),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{settings.download_filename}"'},
    )


@app.post("/upload", response_model=UploadResponse)
async def upload_csv(
    file: UploadFile = File(...),
    period_mode: Optional[PeriodMode] = Form(None),
    separator: Optional[Separator] = Form(None),
    deduplicate: bool = Form(False),
):
    if not (file.filename or "").lower().endswith(ALLOWED_UPLOAD_EXTENSIONS):
        raise HTTPException(status_code=422, detail="Only CSV or TXT files are supported")

    raw = await file.read()
    extraction = extract_company_names(raw)

    req = GenerateRequest(
        period_mode=period_mode or settings.default_period_mode,
        separator=separator or settings.default_separator,
        deduplicate=deduplicate,
    )
    names = deduplicate_names(extraction.names) if deduplicate else extraction.names
    logger.info("Upload %s: %d names from column %r", file.filename, len(names), extraction.column)
    return UploadResponse(extraction=extraction, result=_generate(names, req))


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    uvicorn.run("app.main:app", host=settings.host, port=settings.port)
