"""
Translation of form submissions and spreadsheet rows into complaint records
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from complaint_register.config import Settings, get_settings
from complaint_register.logging_config import logger
from complaint_register.services.dates import days_between, normalize_date
from complaint_register.services.serials import format_serial

# UI form field name -> record attribute
FORM_FIELDS = {
    "farmerName": "farmer_name",
    "complaintBrief": "complaint_brief",
    "materialSupplyDate": "material_supply_date",
    "complainDate": "complain_date",
    "solveDate": "solve_date",
    "closeDate": "close_date",
    "complainType": "complain_type",
    "dealerName": "dealer_name",
    "areaManager": "area_manager",
    "status": "status",
    "solutionDescription": "solution_description",
    "replacementReceived": "replacement_received",
}

# Spreadsheet column header -> record attribute
SPREADSHEET_COLUMNS = {
    "Sr. No": "serial",
    "FARMER NAME / DEALER NAME": "farmer_name",
    "SHORT BRIEF OF COMPLAINTS": "complaint_brief",
    "MATERIAL SUPPLY DATE": "material_supply_date",
    "COMPLAIN DATE": "complain_date",
    "SOLVE DATE": "solve_date",
    "SOLVE DAYS": "solve_days",
    "CLOSE DATE": "close_date",
    "CLOSE DAYS": "close_days",
    "COMPLAIN TYPE": "complain_type",
    "DEALER NAME": "dealer_name",
    "AREA MANAGER": "area_manager",
    "SOLUTION STATUS": "status",
    "DESCRIPTION FOR SOLUTION": "solution_description",
}

DATE_FIELDS = ("material_supply_date", "complain_date", "solve_date", "close_date")
DAY_FIELDS = ("solve_days", "close_days")

# Upload field name -> (record attribute, max files)
ATTACHMENT_FIELDS = {
    "complainForm": ("complain_form", 1),
    "photo": ("photo", 5),
    "video": ("video", 5),
}

_HEADER_LOOKUP = {header.strip().upper(): attr for header, attr in SPREADSHEET_COLUMNS.items()}


@dataclass
class MappedRecord:
    """A record in canonical shape, ready for the complaint store"""

    values: Dict[str, Any] = field(default_factory=dict)
    serial: Optional[str] = None
    is_update: bool = False


def _clean_text(value: Any) -> Optional[str]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value).strip()
    return text or None


def _clean_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return None


class RecordMapper:
    """Maps external rows onto the canonical complaint record"""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.policy = self.settings.INVERTED_RANGE_POLICY
        self.recompute = self.settings.DERIVED_DAYS_MODE == "recompute"

    def _solve_days(self, values: Dict[str, Any]) -> Optional[int]:
        return days_between(values.get("complain_date"), values.get("solve_date"), self.policy, "solveDate")

    def _close_days(self, values: Dict[str, Any]) -> Optional[int]:
        return days_between(values.get("complain_date"), values.get("close_date"), self.policy, "closeDate")

    def _serial_from_cell(self, value: Any) -> Optional[str]:
        number = None
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            number = _clean_int(value)
        elif isinstance(value, str) and value.strip().isdigit():
            number = int(value.strip())
        if number is not None:
            return format_serial(number - 1, self.settings.SERIAL_PREFIX, self.settings.SERIAL_WIDTH)
        return _clean_text(value)

    def map_form(
        self,
        form: Mapping[str, Any],
        uploads: Optional[Mapping[str, List[str]]] = None,
        serial: Optional[str] = None
    ) -> MappedRecord:
        """
        Map a single-record form submission

        Args:
            form: Submitted form fields keyed by UI field name
            uploads: Stored filenames per upload field (complainForm, photo, video)
            serial: Existing serial when the submission edits a record

        Returns:
            MappedRecord; is_update is set when a serial was supplied
        """
        serial = _clean_text(serial)
        uploads = uploads or {}
        values: Dict[str, Any] = {}

        for name, attr in FORM_FIELDS.items():
            raw = form.get(name)
            values[attr] = normalize_date(raw) if attr in DATE_FIELDS else _clean_text(raw)

        values["solve_days"] = self._solve_days(values)
        if self.recompute:
            values["close_days"] = self._close_days(values)

        for name, (attr, limit) in ATTACHMENT_FIELDS.items():
            filenames = [f for f in uploads.get(name) or [] if f][:limit]
            if filenames:
                values[attr] = ",".join(filenames)
            elif not serial:
                values[attr] = None

        logger.debug(f"Mapped form submission ({'update ' + serial if serial else 'create'})")
        return MappedRecord(values=values, serial=serial, is_update=bool(serial))

    def map_spreadsheet_row(self, row: Mapping[str, Any]) -> MappedRecord:
        """
        Map one spreadsheet row keyed by column header

        Headers are matched case-insensitively. Dates are normalized; the
        SOLVE DAYS and CLOSE DAYS cells are kept as given unless the mapper
        runs in recompute mode.
        """
        values: Dict[str, Any] = {attr: None for attr in SPREADSHEET_COLUMNS.values()}
        for header, raw in row.items():
            attr = _HEADER_LOOKUP.get(str(header).strip().upper())
            if attr is None:
                continue
            if attr == "serial":
                values[attr] = self._serial_from_cell(raw)
            elif attr in DATE_FIELDS:
                values[attr] = normalize_date(raw)
            elif attr in DAY_FIELDS:
                values[attr] = _clean_int(raw)
            else:
                values[attr] = _clean_text(raw)

        if self.recompute:
            values["solve_days"] = self._solve_days(values)
            values["close_days"] = self._close_days(values)

        serial = values.pop("serial")
        return MappedRecord(values=values, serial=serial, is_update=False)
