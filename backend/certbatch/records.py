"""
Record loader - tabular input to RecordSet

Supports .csv (header row + rows) and .xlsx (first worksheet, first row
as header). Rows with any empty cell are dropped, as the layout tools
reject incomplete rows.
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path

from openpyxl import load_workbook

from .interfaces import DataError
from .models import RecordSet

logger = logging.getLogger(__name__)


def _cell_text(value) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def _read_csv(path: Path) -> tuple[list[str], list[list[str]]]:
    with open(path, newline="", encoding="utf-8-sig") as f:
        rows = list(csv.reader(f))
    if not rows:
        return [], []
    return [c.strip() for c in rows[0]], [[c.strip() for c in row] for row in rows[1:]]


def _read_xlsx(path: Path) -> tuple[list[str], list[list[str]]]:
    wb = load_workbook(path, read_only=True, data_only=True)
    try:
        ws = wb.worksheets[0]
        rows = [[_cell_text(v) for v in row] for row in ws.iter_rows(values_only=True)]
    finally:
        wb.close()
    if not rows:
        return [], []
    return rows[0], rows[1:]


def load_records(path: str | Path) -> RecordSet:
    """Load records from a CSV or XLSX file"""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Records file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".csv":
        columns, values = _read_csv(path)
    elif suffix == ".xlsx":
        columns, values = _read_xlsx(path)
    else:
        raise DataError(f"Unsupported records file type: {suffix}")

    complete = [
        row for row in values
        if len(row) == len(columns) and all(cell != "" for cell in row)
    ]
    dropped = len(values) - len(complete)
    if dropped:
        logger.info(f"Dropped {dropped} incomplete rows from {path.name}")

    return RecordSet.from_rows(columns, complete)
