"""
Serial number allocation for complaint records
"""
import re
from typing import Optional

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from complaint_register.config import Settings, get_settings
from complaint_register.logging_config import logger
from complaint_register.models import Complaint, SerialSequence

SEQUENCE_NAME = "complaint"


def format_serial(count: int, prefix: str = "C", width: int = 4) -> str:
    """
    Format the serial following `count` existing records

    The width is a minimum: C9999 is followed by C10000.
    """
    return f"{prefix}{str(count + 1).zfill(width)}"


class SerialAllocator:
    """Reserves unique, sequential serials from a counter row in the store"""

    def __init__(self, settings: Optional[Settings] = None, max_attempts: int = 1000):
        """
        Initialize serial allocator

        Args:
            settings: Settings providing the serial prefix and width
            max_attempts: Upper bound on reservations skipped because the
                serial was already taken by an imported record
        """
        self.settings = settings or get_settings()
        self.prefix = self.settings.SERIAL_PREFIX
        self.width = self.settings.SERIAL_WIDTH
        self.max_attempts = max_attempts
        self._pattern = re.compile(rf"^{re.escape(self.prefix)}(\d+)$")

    def format(self, count: int) -> str:
        return format_serial(count, self.prefix, self.width)

    def parse(self, serial: str) -> Optional[int]:
        """Return the sequence number encoded in a serial, if it has our format"""
        match = self._pattern.match(serial or "")
        return int(match.group(1)) if match else None

    async def _seed_value(self, session: AsyncSession) -> int:
        count = (await session.execute(select(func.count()).select_from(Complaint))).scalar_one()
        highest = 0
        serials = await session.execute(select(Complaint.serial))
        for (serial,) in serials:
            number = self.parse(serial)
            if number is not None and number > highest:
                highest = number
        return max(count, highest)

    async def _next_value(self, session: AsyncSession) -> int:
        result = await session.execute(
            update(SerialSequence)
            .where(SerialSequence.name == SEQUENCE_NAME)
            .values(current_value=SerialSequence.current_value + 1)
        )
        if result.rowcount == 0:
            seed = await self._seed_value(session)
            session.add(SerialSequence(name=SEQUENCE_NAME, current_value=seed + 1))
            await session.flush()
            logger.info(f"Serial sequence seeded at {seed}")
            return seed + 1

        value = await session.execute(
            select(SerialSequence.current_value).where(SerialSequence.name == SEQUENCE_NAME)
        )
        return value.scalar_one()

    async def _is_taken(self, session: AsyncSession, serial: str) -> bool:
        result = await session.execute(select(Complaint.serial).where(Complaint.serial == serial))
        return result.first() is not None

    async def reserve(self, session: AsyncSession) -> str:
        """
        Atomically reserve the next serial inside the session's transaction

        The counter row is incremented before it is read, so the write lock
        is held until the caller commits and concurrent creations cannot
        observe the same value. Reserved values are never handed out again,
        even if the record is later deleted.

        Args:
            session: Session whose transaction will also insert the record

        Returns:
            The reserved serial, e.g. C0042
        """
        for _ in range(self.max_attempts):
            value = await self._next_value(session)
            serial = self.format(value - 1)
            if not await self._is_taken(session, serial):
                logger.debug(f"Reserved serial {serial}")
                return serial
            logger.warning(f"Serial {serial} already in use, reserving the next one")
        raise RuntimeError(f"Could not reserve a free serial after {self.max_attempts} attempts")
