"""
CSV assembly for Capital IQ formula sheets.

Responsibilities:
- row construction (name + formula set, Excel row numbering)
- cell escaping for the semicolon dialect
- document serialization (CRLF, header first)
- BOM-prefixed bytes for file download
"""

from __future__ import annotations

from typing import Iterable, List, Sequence

from pydantic import BaseModel, ConfigDict, Field

from .formulas import PeriodMode, Separator, generate_formulas
from .names import deduplicate_names, parse_names
from .rules import HEADERS, LINE_TERMINATOR, OUTPUT_DELIMITER, TARGET_ENCODING

# Row 1 holds the header.
FIRST_DATA_ROW = 2


class CsvRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    excel_row: int = Field(ge=FIRST_DATA_ROW)
    companyname: str
    capital_iq_ticker: str
    revenue_latest: str
    ebit_latest: str
    ebitda_latest: str

    def cells(self) -> List[str]:
        return [getattr(self, h) for h in HEADERS]


def escape_cell(value: str) -> str:
    """
    Escape a value for a semicolon-delimited CSV cell.

    Formula cells (leading "=") are always quoted. Anything containing the
    delimiter, a double quote, CR or LF is quoted too; internal quotes are
    doubled.
    """
    needs_quoting = (
        value.startswith("=")
        or OUTPUT_DELIMITER in value
        or '"' in value
        or "\n" in value
        or "\r" in value
    )
    if not needs_quoting:
        return value

    escaped = value.replace('"', '""')
    return f'"{escaped}"'


def build_rows(names: Sequence[str], mode: PeriodMode, sep: Separator) -> List[CsvRow]:
    rows: List[CsvRow] = []
    for index, name in enumerate(names):
        excel_row = index + FIRST_DATA_ROW
        formulas = generate_formulas(excel_row, mode, sep)
        rows.append(
            CsvRow(
                excel_row=excel_row,
                companyname=name,
                capital_iq_ticker=formulas.ticker,
                revenue_latest=formulas.revenue,
                ebit_latest=formulas.ebit,
                ebitda_latest=formulas.ebitda,
            )
        )
    return rows


def serialize_csv(rows: Iterable[CsvRow]) -> str:
    header_line = OUTPUT_DELIMITER.join(escape_cell(h) for h in HEADERS)
    data_lines = [OUTPUT_DELIMITER.join(escape_cell(c) for c in row.cells()) for row in rows]
    return LINE_TERMINATOR.join([header_line, *data_lines])


def generate_csv_from_text(text: str, mode: PeriodMode, sep: Separator, deduplicate: bool) -> str:
    """Full pipeline: raw text -> CSV string."""
    names = parse_names(text, deduplicate)
    return serialize_csv(build_rows(names, mode, sep))


def generate_csv_from_names(names: Sequence[str], mode: PeriodMode, sep: Separator, deduplicate: bool) -> str:
    """
    Full pipeline for names that were already extracted (e.g. from an upload).

    No splitting or trimming happens here; that is the extractor's job.
    """
    cleaned = deduplicate_names(names) if deduplicate else list(names)
    return serialize_csv(build_rows(cleaned, mode, sep))


def encode_csv_download(csv_text: str) -> bytes:
    return csv_text.encode(TARGET_ENCODING)
