"""
Export service for generating complaint spreadsheets
"""
from pathlib import Path
from typing import Any, Dict, Iterable, List, Union

from openpyxl import Workbook
from openpyxl.styles import Font

from complaint_register.logging_config import logger
from complaint_register.models import Complaint
from complaint_register.services.record_mapper import SPREADSHEET_COLUMNS

SHEET_TITLE = "Complaints"

SAMPLE_ROWS: List[Dict[str, Any]] = [
    {
        "Sr. No": None,
        "FARMER NAME / DEALER NAME": "John Doe",
        "SHORT BRIEF OF COMPLAINTS": "Water shortage",
        "MATERIAL SUPPLY DATE": "01-01-2024",
        "COMPLAIN DATE": "05-01-2024",
        "SOLVE DATE": "10-01-2024",
        "SOLVE DAYS": 5,
        "CLOSE DATE": "15-01-2024",
        "CLOSE DAYS": 10,
        "COMPLAIN TYPE": "Water Issue",
        "DEALER NAME": "Dealer A",
        "AREA MANAGER": "Manager X",
        "SOLUTION STATUS": "Closed",
        "DESCRIPTION FOR SOLUTION": "Provided water supply.",
    },
]


class ExportService:
    """Service for writing complaint workbooks in the import layout"""

    def __init__(self):
        self.headers = list(SPREADSHEET_COLUMNS.keys())

    def _write(self, rows: Iterable[Dict[str, Any]], path: Union[str, Path]) -> int:
        workbook = Workbook()
        sheet = workbook.active
        sheet.title = SHEET_TITLE

        sheet.append(self.headers)
        for cell in sheet[1]:
            cell.font = Font(bold=True)

        written = 0
        for row in rows:
            sheet.append([row.get(header) for header in self.headers])
            written += 1

        workbook.save(path)
        return written

    def build_sample_workbook(self, path: Union[str, Path]) -> Path:
        """
        Write the downloadable import template

        Args:
            path: Destination .xlsx path

        Returns:
            The written path
        """
        self._write(SAMPLE_ROWS, path)
        logger.info(f"Sample workbook written to {path}")
        return Path(path)

    def export_complaints(self, complaints: Iterable[Complaint], path: Union[str, Path]) -> Path:
        """Write complaints with the import headers so the file can be re-imported"""
        rows = (
            {header: getattr(complaint, attr) for header, attr in SPREADSHEET_COLUMNS.items()}
            for complaint in complaints
        )
        written = self._write(rows, path)
        logger.info(f"Exported {written} complaints to {path}")
        return Path(path)
