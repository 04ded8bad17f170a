# src/nburate/adapters/spreadsheet/workbook.py
"""
Workbook Reporter - Writing Rates into xlsx Spreadsheets

Two layouts are supported:
- a two-column summary block (``Date | YYYY-MM-DD``, ``USD | rate``,
  ``EUR | rate``) written at an anchor cell, for single-date lookups
- a rate table whose header row holds ``Date``, ``USD NBU`` and
  ``EURO NBU``; every data row below it is filled by a BatchResolver

Cell formatting is left to the workbook owner; only values are written.

Files that USE this module:
- nburate.app (--workbook option and the fill command)
- tests.test_workbook (unit tests)

Files that this module USES:
- nburate.application.batch_service (BatchResolver, column names)
- nburate.adapters.formatting.formatter (summary_rows)
"""
from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union
from zipfile import BadZipFile

from openpyxl import Workbook, load_workbook
from openpyxl.utils.cell import column_index_from_string, coordinate_from_string
from openpyxl.utils.exceptions import CellCoordinatesException, InvalidFileException
from openpyxl.worksheet.worksheet import Worksheet

from nburate.adapters.formatting.formatter import summary_rows
from nburate.application.batch_service import (
    DATE_COLUMN,
    EUR_COLUMN,
    USD_COLUMN,
    BatchReport,
    BatchResolver,
    check_columns,
)
from nburate.domain.errors import SheetNotFoundError, WorkbookError
from nburate.domain.models import RatePair

log = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _load(path: Path) -> Workbook:
    try:
        return load_workbook(path)
    except (InvalidFileException, BadZipFile, KeyError, OSError) as e:
        raise WorkbookError(f"Cannot open workbook {path}: {e}") from e


def _save(wb: Workbook, path: Path) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(path)
    except OSError as e:
        raise WorkbookError(f"Cannot save workbook {path}: {e}") from e


def _parse_anchor(anchor: str) -> Tuple[int, int]:
    """Return (row, column) of a cell reference such as ``C2``."""
    try:
        col_letter, row = coordinate_from_string(anchor)
        return row, column_index_from_string(col_letter)
    except (CellCoordinatesException, ValueError, TypeError) as e:
        raise WorkbookError(f"Invalid anchor cell {anchor!r}: {e}") from e


def _open_or_create(path: Path) -> Workbook:
    if path.exists():
        return _load(path)
    log.info("Creating workbook %s", path)
    return Workbook()


def _select_sheet(wb: Workbook, sheet_name: Optional[str], create: bool) -> Worksheet:
    if sheet_name is None:
        return wb.active
    if sheet_name in wb.sheetnames:
        return wb[sheet_name]
    if not create:
        raise SheetNotFoundError(f"Worksheet {sheet_name!r} not found in workbook")
    return wb.create_sheet(sheet_name)


def write_summary(
    path: PathLike,
    rate_date: date,
    rates: RatePair,
    sheet_name: Optional[str] = None,
    anchor: str = "A1",
) -> None:
    """
    Write the Date / currency summary block into a workbook.

    Args:
        path: xlsx file (created if missing)
        rate_date: Day the rates apply to
        rates: Rate pair to write
        sheet_name: Target sheet (created if missing; active sheet when None)
        anchor: Top-left cell of the block

    Raises:
        WorkbookError: If the anchor is not a cell reference or the file
            cannot be opened or saved
    """
    first_row, first_col = _parse_anchor(anchor)
    path = Path(path)
    wb = _open_or_create(path)
    ws = _select_sheet(wb, sheet_name, create=True)

    for offset, (label, value) in enumerate(summary_rows(rate_date, rates)):
        ws.cell(row=first_row + offset, column=first_col, value=label)
        ws.cell(row=first_row + offset, column=first_col + 1, value=value)

    _save(wb, path)
    log.info("Wrote rate summary to %s!%s", path, ws.title)


def fill_rate_table(
    path: PathLike,
    resolver: BatchResolver,
    sheet_name: Optional[str] = None,
) -> BatchReport:
    """
    Fill the ``USD NBU`` / ``EURO NBU`` columns of a rate table.

    Args:
        path: Existing xlsx file
        resolver: Batch resolver used for the lookups
        sheet_name: Sheet holding the table (active sheet when None)

    Returns:
        BatchReport of the run

    Raises:
        FileNotFoundError: If the workbook does not exist
        SheetNotFoundError: If ``sheet_name`` is not in the workbook
        MissingColumnsError: If the header row lacks a required column
        WorkbookError: If the file is not a readable xlsx workbook or cannot be saved
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Workbook not found: {path}")
    wb = _load(path)
    ws = _select_sheet(wb, sheet_name, create=False)

    headers = [cell.value for cell in ws[1]]
    check_columns(headers)
    columns = {name: headers.index(name) + 1 for name in (DATE_COLUMN, USD_COLUMN, EUR_COLUMN)}

    entries: List[Tuple[int, Dict[str, object]]] = []
    for row_idx in range(2, ws.max_row + 1):
        entries.append((row_idx, {DATE_COLUMN: ws.cell(row=row_idx, column=columns[DATE_COLUMN]).value}))

    report = resolver.resolve(row for _, row in entries)

    for row_idx, row in entries:
        if USD_COLUMN in row:
            ws.cell(row=row_idx, column=columns[USD_COLUMN], value=row[USD_COLUMN])
            ws.cell(row=row_idx, column=columns[EUR_COLUMN], value=row[EUR_COLUMN])

    if report.has_updates:
        _save(wb, path)
    return report
