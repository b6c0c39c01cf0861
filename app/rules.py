"""
Deterministic output rules.

Every constant that shapes the generated document lives here so the
formula and CSV code never hard-code format details.
"""

TARGET_ENCODING = "utf-8-sig"  # UTF-8 with BOM, for spreadsheet encoding detection
OUTPUT_DELIMITER = ";"
LINE_TERMINATOR = "\r\n"

HEADERS = (
    "companyname",
    "capital_iq_ticker",
    "revenue_latest",
    "ebit_latest",
    "ebitda_latest",
)

# Capital IQ mnemonics
TICKER_MNEMONIC = "IQ_COMPANY_TICKER"
REVENUE_MNEMONIC = "IQ_TOTAL_REV"
EBIT_MNEMONIC = "IQ_EBIT"
EBITDA_MNEMONIC = "IQ_EBITDA"

# Upload extraction
NAME_COLUMN = "companyname"
SNIFF_DELIMITERS = [",", ";", "\t", "|"]
SNIFF_SAMPLE_SIZE = 4096
ALLOWED_UPLOAD_EXTENSIONS = (".csv", ".txt")
