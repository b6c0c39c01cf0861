from __future__ import annotations

from typing import List, Optional
from pydantic import BaseModel, Field

from .config import settings
from .csv_builder import CsvRow
from .formulas import PeriodMode, Separator


class GenerateRequest(BaseModel):
    text: str = Field(default="", examples=["Apple Inc.\nMicrosoft Corporation\nAlphabet Inc."])
    period_mode: PeriodMode = Field(default_factory=lambda: settings.default_period_mode)
    separator: Separator = Field(default_factory=lambda: settings.default_separator)
    deduplicate: bool = False
    # Reminder flag only: the input is already an identifier (ticker / ISIN / CIQ ID).
    # It never changes the generated formulas.
    treat_as_identifier: bool = False


class GenerateResponse(BaseModel):
    csv: str
    row_count: int
    preview: List[CsvRow] = Field(default_factory=list)
    preview_truncated: bool = False
    period_mode: PeriodMode
    separator: Separator
    deduplicate: bool
    treat_as_identifier: bool = False


class UploadExtraction(BaseModel):
    names: List[str] = Field(default_factory=list)
    column: Optional[str] = None
    warning: Optional[str] = None
    delimiter: str = ","
    encoding: str = "utf-8"


class UploadResponse(BaseModel):
    extraction: UploadExtraction
    result: GenerateResponse


class HealthResponse(BaseModel):
    ok: bool = True
