"""
Persistence boundary for complaint records
"""
from dataclasses import dataclass
from typing import List, Optional, Union

from sqlalchemy import String, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from complaint_register.config import Settings, get_settings
from complaint_register.logging_config import logger
from complaint_register.models import Complaint
from complaint_register.services.record_mapper import MappedRecord
from complaint_register.services.serials import SerialAllocator

ALL = "all"

# Sort key accepted by the list view -> record attribute
SORTABLE_FIELDS = {
    "serial": "serial",
    "srno": "serial",
    "farmerName": "farmer_name",
    "complaintBrief": "complaint_brief",
    "materialSupplyDate": "material_supply_date",
    "complainDate": "complain_date",
    "solveDate": "solve_date",
    "closeDate": "close_date",
    "solveDays": "solve_days",
    "closeDays": "close_days",
    "complainType": "complain_type",
    "dealerName": "dealer_name",
    "areaManager": "area_manager",
    "status": "status",
    "replacementReceived": "replacement_received",
}

# Stored as DD-MM-YYYY text, ordered as YYYYMMDD
DATE_SORT_FIELDS = {"material_supply_date", "complain_date", "solve_date", "close_date"}


def _date_key(column):
    return (
        func.substr(column, 7, 4, type_=String)
        + func.substr(column, 4, 2, type_=String)
        + func.substr(column, 1, 2, type_=String)
    )


def sort_keys(attr: str):
    """Order-by expressions for a record attribute"""
    column = getattr(Complaint, attr)
    if attr == "serial":
        # Padding is a minimum width, so longer serials sort after shorter ones
        return [func.length(column), column]
    if attr in DATE_SORT_FIELDS:
        return [_date_key(column)]
    return [column]


@dataclass
class ComplaintPage:
    """One page of the complaint list"""

    items: List[Complaint]
    page: int
    page_size: Union[int, str]
    total: int
    offset: int
    is_last_page: bool


class ComplaintStore:
    """CRUD and listing operations over the complaints table"""

    def __init__(
        self,
        session: AsyncSession,
        settings: Optional[Settings] = None,
        allocator: Optional[SerialAllocator] = None
    ):
        self.session = session
        self.settings = settings or get_settings()
        self.allocator = allocator or SerialAllocator(self.settings)

    async def count(self) -> int:
        result = await self.session.execute(select(func.count()).select_from(Complaint))
        return result.scalar_one()

    async def get(self, serial: str) -> Optional[Complaint]:
        return await self.session.get(Complaint, serial)

    async def create(self, record: MappedRecord) -> Complaint:
        """
        Insert a new complaint, reserving a serial when the record has none

        Raises:
            sqlalchemy.exc.IntegrityError: If the serial is already taken
        """
        serial = record.serial or await self.allocator.reserve(self.session)
        complaint = Complaint(serial=serial, **record.values)
        self.session.add(complaint)
        await self.session.commit()
        logger.info(f"Created complaint {serial}", extra={"serial": serial})
        return complaint

    async def update(self, serial: str, record: MappedRecord) -> Optional[Complaint]:
        """Overwrite the mapped fields of an existing complaint; None if it does not exist"""
        complaint = await self.get(serial)
        if complaint is None:
            logger.info(f"Update skipped, no complaint {serial}")
            return None

        for attr, value in record.values.items():
            setattr(complaint, attr, value)
        self.session.add(complaint)
        await self.session.commit()
        logger.info(f"Updated complaint {serial}", extra={"serial": serial})
        return complaint

    async def save(self, record: MappedRecord) -> Optional[Complaint]:
        """Update when the record carries a serial from the edit form, create otherwise"""
        if record.is_update:
            return await self.update(record.serial, record)
        return await self.create(record)

    async def delete(self, serial: str) -> bool:
        complaint = await self.get(serial)
        if complaint is None:
            return False
        await self.session.delete(complaint)
        await self.session.commit()
        logger.info(f"Deleted complaint {serial}", extra={"serial": serial})
        return True

    async def list_page(
        self,
        page: int = 1,
        page_size: Union[int, str] = 10,
        sort_by: str = "serial",
        order: str = "asc"
    ) -> ComplaintPage:
        """
        List complaints sorted and paginated

        Args:
            page: 1-based page number, ignored when page_size is "all"
            page_size: Records per page or "all"
            sort_by: Key from SORTABLE_FIELDS
            order: asc or desc

        Returns:
            ComplaintPage with the records and pagination state
        """
        if sort_by not in SORTABLE_FIELDS:
            raise ValueError(f"Cannot sort by '{sort_by}'")
        if page_size != ALL and (not isinstance(page_size, int) or page_size < 1):
            raise ValueError(f"Invalid page size '{page_size}'")
        page = max(page, 1)

        keys = sort_keys(SORTABLE_FIELDS[sort_by])
        query = select(Complaint).order_by(*(key.desc() if order == "desc" else key.asc() for key in keys))

        offset = 0
        if page_size != ALL:
            offset = (page - 1) * page_size
            query = query.offset(offset).limit(page_size)

        result = await self.session.execute(query)
        items = list(result.scalars().all())
        total = await self.count()

        is_last_page = page_size == ALL or page * page_size >= total
        return ComplaintPage(
            items=items,
            page=page,
            page_size=page_size,
            total=total,
            offset=offset,
            is_last_page=is_last_page,
        )

    async def mark_replacement_received(self, serial: str) -> bool:
        complaint = await self.get(serial)
        if complaint is None:
            return False
        complaint.replacement_received = self.settings.REPLACEMENT_RECEIVED_VALUE
        self.session.add(complaint)
        await self.session.commit()
        logger.info(f"Replacement received for {serial}", extra={"serial": serial})
        return True

    async def list_pending_replacements(self) -> List[Complaint]:
        """Complaints whose replacement status is set to anything but received"""
        result = await self.session.execute(
            select(Complaint)
            .where(Complaint.replacement_received.isnot(None))
            .where(Complaint.replacement_received != self.settings.REPLACEMENT_RECEIVED_VALUE)
            .order_by(*sort_keys("serial"))
        )
        return list(result.scalars().all())

    async def list_all(self) -> List[Complaint]:
        result = await self.session.execute(select(Complaint).order_by(*sort_keys("serial")))
        return list(result.scalars().all())
