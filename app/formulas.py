"""Capital IQ formula construction."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict

from .rules import EBIT_MNEMONIC, EBITDA_MNEMONIC, REVENUE_MNEMONIC, TICKER_MNEMONIC


class PeriodMode(str, Enum):
    LATEST_FISCAL_YEAR = "IQ_FY"
    LATEST_FISCAL_QUARTER = "IQ_FQ"
    LATEST_TWELVE_MONTHS = "LTM"


class Separator(str, Enum):
    """Argument separator inside a formula (";" for EU locales, "," for US/UK)."""

    SEMICOLON = ";"
    COMMA = ","


class FormulaSet(BaseModel):
    model_config = ConfigDict(frozen=True)

    ticker: str
    revenue: str
    ebit: str
    ebitda: str


def build_ciq_formula(cell_ref: str, mnemonic: str, period: Optional[str], sep: Separator) -> str:
    """
    Build a single CIQ formula string.

    `period=None` drops the third argument, which makes the add-in use its
    default period (LTM).
    """
    s = Separator(sep).value
    if period:
        return f'=CIQ({cell_ref}{s}"{mnemonic}"{s}{period})'
    return f'=CIQ({cell_ref}{s}"{mnemonic}")'


def period_arg(mode: PeriodMode) -> Optional[str]:
    mode = PeriodMode(mode)
    if mode is PeriodMode.LATEST_TWELVE_MONTHS:
        return None
    return mode.value


def generate_formulas(row_index: int, mode: PeriodMode, sep: Separator) -> FormulaSet:
    """
    Generate the formula set for one spreadsheet row.

    `row_index` is the 1-based Excel row (data starts at row 2). The ticker
    formula never carries a period.
    """
    cell_ref = f"A{row_index}"
    period = period_arg(mode)

    return FormulaSet(
        ticker=build_ciq_formula(cell_ref, TICKER_MNEMONIC, None, sep),
        revenue=build_ciq_formula(cell_ref, REVENUE_MNEMONIC, period, sep),
        ebit=build_ciq_formula(cell_ref, EBIT_MNEMONIC, period, sep),
        ebitda=build_ciq_formula(cell_ref, EBITDA_MNEMONIC, period, sep),
    )
