"""
Bulk import of complaint spreadsheets
"""
import asyncio
from dataclasses import dataclass, field
from itertools import zip_longest
from pathlib import Path
from typing import Any, AsyncContextManager, Callable, Dict, Iterable, List, Mapping, Optional, Union

import openpyxl
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from complaint_register.config import Settings, get_settings
from complaint_register.exceptions import ComplaintRegisterError, SpreadsheetReadError
from complaint_register.logging_config import logger
from complaint_register.services.complaint_store import ComplaintStore
from complaint_register.services.record_mapper import RecordMapper

SessionFactory = Callable[[], AsyncContextManager[AsyncSession]]

# Data rows start below the header row
FIRST_DATA_ROW = 2


@dataclass
class RowOutcome:
    """Result of importing one spreadsheet row"""

    row_number: int
    ok: bool
    serial: Optional[str] = None
    error: Optional[str] = None


@dataclass
class ImportReport:
    """Per-row results of a spreadsheet import"""

    outcomes: List[RowOutcome] = field(default_factory=list)
    skipped: int = 0

    @property
    def imported(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.ok)

    @property
    def failures(self) -> List[RowOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.ok]

    @property
    def succeeded(self) -> bool:
        return not self.failures


def _is_blank(row: Mapping[str, Any]) -> bool:
    return all(value is None or (isinstance(value, str) and not value.strip()) for value in row.values())


def read_workbook(path: Union[str, Path]) -> List[Dict[str, Any]]:
    """
    Read the first sheet of a workbook into one dict per row

    Args:
        path: Path of an .xlsx/.xlsm file

    Returns:
        Rows keyed by the header cells of the first row; blank rows are kept
        so that list positions line up with sheet row numbers

    Raises:
        SpreadsheetReadError: If the file is not a readable workbook
    """
    try:
        workbook = openpyxl.load_workbook(path, read_only=True, data_only=True)
    except Exception as e:
        raise SpreadsheetReadError(f"Failed to read Excel file: {str(e)}", str(path)) from e

    try:
        sheet = workbook.worksheets[0]
        rows = sheet.iter_rows(values_only=True)
        header_row = next(rows, None)
        if header_row is None:
            return []

        headers = [str(cell).strip() if cell is not None else None for cell in header_row]
        data = []
        for values in rows:
            data.append({
                header: value
                for header, value in zip_longest(headers, values)
                if header
            })
        return data
    finally:
        workbook.close()


class ImportReconciler:
    """Maps and persists spreadsheet rows one at a time, collecting per-row outcomes"""

    def __init__(
        self,
        session_factory: SessionFactory,
        settings: Optional[Settings] = None,
        mapper: Optional[RecordMapper] = None
    ):
        """
        Initialize import reconciler

        Args:
            session_factory: Returns an async context manager yielding a session;
                every row runs in its own session so a failing row leaves the
                others committed
            settings: Application settings
            mapper: Record mapper, built from settings if omitted
        """
        self.session_factory = session_factory
        self.settings = settings or get_settings()
        self.mapper = mapper or RecordMapper(self.settings)

    async def _import_row(self, row_number: int, row: Mapping[str, Any]) -> RowOutcome:
        serial = None
        try:
            record = self.mapper.map_spreadsheet_row(row)
            serial = record.serial
            async with self.session_factory() as session:
                complaint = await ComplaintStore(session, self.settings).create(record)
            return RowOutcome(row_number=row_number, ok=True, serial=complaint.serial)
        except (ComplaintRegisterError, SQLAlchemyError) as e:
            logger.error(f"Error importing row {row_number}: {str(e)}")
            return RowOutcome(row_number=row_number, ok=False, serial=serial, error=str(e))

    async def import_rows(self, rows: Iterable[Mapping[str, Any]]) -> ImportReport:
        """
        Import rows in order

        Args:
            rows: Spreadsheet rows keyed by column header, in sheet order

        Returns:
            ImportReport with one outcome per non-blank row
        """
        report = ImportReport()
        for row_number, row in enumerate(rows, start=FIRST_DATA_ROW):
            if _is_blank(row):
                report.skipped += 1
                continue
            report.outcomes.append(await self._import_row(row_number, row))

        logger.info(
            f"Import completed - Imported: {report.imported}, "
            f"Failed: {len(report.failures)}, Skipped: {report.skipped}"
        )
        return report

    async def import_file(self, path: Union[str, Path]) -> ImportReport:
        """Import a stored spreadsheet, removing the file afterwards whatever happens"""
        path = Path(path)
        try:
            rows = await asyncio.to_thread(read_workbook, path)
            return await self.import_rows(rows)
        finally:
            path.unlink(missing_ok=True)
            logger.debug(f"Removed uploaded spreadsheet {path.name}")
