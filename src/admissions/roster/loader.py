"""Spreadsheet ingestion for the applicant roster.

Reads the first (or a named) worksheet of an Excel workbook, or a CSV file,
into plain row dicts. Column names are kept exactly as written, since the
normalizer matches them verbatim. Empty cells become None.

Usage:
    from admissions.roster.loader import load_roster_rows

    sheet_name, rows = load_roster_rows(Path("roster.xlsx"))
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pandas as pd

from admissions.core.errors import RosterLoadError
from admissions.core.logging import get_logger

logger = get_logger(__name__)

# Formats openpyxl reads; legacy .xls is rejected as unsupported
EXCEL_SUFFIXES = {".xlsx", ".xlsm"}
CSV_SUFFIXES = {".csv"}


def _frame_to_rows(df: pd.DataFrame) -> list[dict[str, Any]]:
    df = df.dropna(axis=0, how="all")
    df.columns = [str(c) for c in df.columns]
    df = df.astype(object).where(pd.notna(df), None)
    return df.to_dict(orient="records")


def load_roster_rows(
    path: Path,
    sheet: str | None = None,
    max_rows: int = 10000,
) -> tuple[str, list[dict[str, Any]]]:
    """Load raw roster rows from a spreadsheet file.

    Args:
        path: Workbook or CSV file
        sheet: Worksheet name (Excel only); defaults to the first sheet
        max_rows: Upper bound on rows read

    Returns:
        Tuple of (source name, rows). The source name is the worksheet name
        for workbooks and the file name for CSV.

    Raises:
        RosterLoadError: If the file is missing, unsupported or unreadable
    """
    if not path.exists():
        raise RosterLoadError(f"Roster file not found: {path}", path=str(path))

    suffix = path.suffix.lower()
    try:
        if suffix in EXCEL_SUFFIXES:
            with pd.ExcelFile(path, engine="openpyxl") as workbook:
                if not workbook.sheet_names:
                    raise RosterLoadError(f"Workbook has no sheets: {path}", path=str(path))
                source_name = sheet or workbook.sheet_names[0]
                if source_name not in workbook.sheet_names:
                    raise RosterLoadError(
                        f"Sheet '{source_name}' not found in {path.name}; "
                        f"available: {', '.join(workbook.sheet_names)}",
                        path=str(path),
                    )
                df = workbook.parse(source_name).head(max_rows)
        elif suffix in CSV_SUFFIXES:
            source_name = path.name
            df = pd.read_csv(path, nrows=max_rows)
        else:
            raise RosterLoadError(
                f"Unsupported roster format '{suffix}' for {path.name}; "
                "use .xlsx, .xlsm or .csv",
                path=str(path),
            )
    except RosterLoadError:
        raise
    except Exception as e:  # noqa: BLE001
        raise RosterLoadError(f"Failed to read roster {path.name}: {e}", path=str(path)) from e

    rows = _frame_to_rows(df)
    logger.info("roster_file_read", path=str(path), source=source_name, rows=len(rows))
    return source_name, rows
