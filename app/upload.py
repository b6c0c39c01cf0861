"""
Company name extraction from uploaded tabular files.

Responsibilities:
- encoding detection + decoding
- dialect detection
- company name column lookup (with first-column fallback)
- extraction of trimmed, non-empty values
"""

from __future__ import annotations

import csv
import io
import logging
import re
from typing import Optional, Tuple

from charset_normalizer import from_bytes

from .models import UploadExtraction
from .rules import NAME_COLUMN, SNIFF_DELIMITERS, SNIFF_SAMPLE_SIZE

logger = logging.getLogger(__name__)

EMPTY_UPLOAD_WARNING = "CSV file is empty or could not be parsed."

_HEADER_NOISE = re.compile(r"[\s_-]")


def decode_upload(raw: bytes) -> Tuple[str, str]:
    """
    Decode uploaded bytes to text. Returns (text, encoding used).

    Rules:
    - Detect encoding best-effort via charset-normalizer.
    - A UTF-8 BOM is stripped.
    - If decode fails, fall back to UTF-8, then to replacement characters.
    """
    match = from_bytes(raw).best()
    decode_used = match.encoding if match is not None else "utf-8"

    if raw.startswith(b"\xef\xbb\xbf") and decode_used.lower().replace("-", "_") in ("utf_8", "utf8"):
        decode_used = "utf-8-sig"

    try:
        return raw.decode(decode_used), decode_used
    except (UnicodeDecodeError, LookupError):
        logger.warning("Decoding upload as %s failed, falling back to utf-8", decode_used)

    try:
        return raw.decode("utf-8-sig"), "utf-8-sig"
    except UnicodeDecodeError:
        return raw.decode("utf-8", errors="replace"), "utf-8"


def detect_delimiter(text: str) -> str:
    try:
        dialect = csv.Sniffer().sniff(text[:SNIFF_SAMPLE_SIZE], delimiters=SNIFF_DELIMITERS)
    except csv.Error:
        return ","
    return dialect.delimiter


def normalize_header(header: str) -> str:
    return _HEADER_NOISE.sub("", header.lower())


def find_name_column(headers: list[str]) -> Optional[str]:
    for header in headers:
        if normalize_header(header) == NAME_COLUMN:
            return header
    return None


def extract_company_names(raw: bytes) -> UploadExtraction:
    """
    Pull company names out of an uploaded CSV/TXT file.

    The column whose header normalizes to "companyname" is used; otherwise
    the first column, with a warning. Never raises on malformed content.
    """
    text, encoding = decode_upload(raw)
    delimiter = detect_delimiter(text)

    reader = csv.DictReader(io.StringIO(text, newline=""), delimiter=delimiter)
    headers = list(reader.fieldnames or [])
    records = list(reader)

    if not headers or not records:
        logger.warning("Upload contained no data rows")
        return UploadExtraction(
            names=[],
            column=None,
            warning=EMPTY_UPLOAD_WARNING,
            delimiter=delimiter,
            encoding=encoding,
        )

    warning = None
    column = find_name_column(headers)
    if column is None:
        column = headers[0]
        warning = f'No "{NAME_COLUMN}" column found. Using first column "{column}" instead.'
        logger.warning("No %s column in upload, using %r", NAME_COLUMN, column)

    names = [(record.get(column) or "").strip() for record in records]
    names = [name for name in names if name]

    return UploadExtraction(
        names=names,
        column=column,
        warning=warning,
        delimiter=delimiter,
        encoding=encoding,
    )
