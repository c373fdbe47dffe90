"""
Unit tests for serial number formatting and reservation
"""
import pytest

from complaint_register.config import Settings
from complaint_register.models import Complaint
from complaint_register.services.serials import SerialAllocator, format_serial


class TestFormatSerial:
    """Test count-based serial formatting"""

    @pytest.mark.parametrize("count,expected", [
        (0, "C0001"),
        (41, "C0042"),
        (998, "C0999"),
        (9999, "C10000"),
    ])
    def test_format(self, count, expected):
        """The serial follows the count, padded to at least four digits"""
        assert format_serial(count) == expected

    def test_custom_prefix_and_width(self):
        """Prefix and width are configurable"""
        assert format_serial(6, prefix="CMP-", width=6) == "CMP-000007"


class TestSerialAllocator:
    """Test atomic serial reservation against the store"""

    @pytest.fixture
    def allocator(self, settings):
        """Allocator with default prefix and width"""
        return SerialAllocator(settings)

    def test_parse(self, allocator):
        """Only serials in our own format carry a sequence number"""
        assert allocator.parse("C0042") == 42
        assert allocator.parse("C10000") == 10000
        assert allocator.parse("X0042") is None
        assert allocator.parse("C00A1") is None

    @pytest.mark.asyncio
    async def test_first_reservation_on_empty_store(self, allocator, session):
        """An empty store starts at C0001"""
        assert await allocator.reserve(session) == "C0001"

    @pytest.mark.asyncio
    async def test_reservations_are_sequential(self, allocator, session):
        """Consecutive reservations never repeat"""
        serials = [await allocator.reserve(session) for _ in range(3)]
        assert serials == ["C0001", "C0002", "C0003"]

    @pytest.mark.asyncio
    async def test_seeded_from_existing_records(self, allocator, session):
        """The counter starts after the records already stored"""
        session.add(Complaint(serial="C0001"))
        session.add(Complaint(serial="C0002"))
        await session.commit()

        assert await allocator.reserve(session) == "C0003"

    @pytest.mark.asyncio
    async def test_seeded_past_highest_imported_serial(self, allocator, session):
        """An imported serial above the count moves the seed forward"""
        session.add(Complaint(serial="C0040"))
        await session.commit()

        assert await allocator.reserve(session) == "C0041"

    @pytest.mark.asyncio
    async def test_skips_taken_serials(self, allocator, session):
        """A serial imported after seeding is skipped"""
        assert await allocator.reserve(session) == "C0001"
        session.add(Complaint(serial="C0002"))
        await session.commit()

        assert await allocator.reserve(session) == "C0003"

    @pytest.mark.asyncio
    async def test_not_reused_after_delete(self, allocator, session):
        """Deleting the latest record does not free its serial"""
        first = await allocator.reserve(session)
        complaint = Complaint(serial=first)
        session.add(complaint)
        await session.commit()
        await session.delete(complaint)
        await session.commit()

        assert await allocator.reserve(session) == "C0002"

    @pytest.mark.asyncio
    async def test_uses_configured_format(self, tmp_path, session):
        """Reserved serials follow the configured prefix and width"""
        custom = Settings(
            DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'unused.db'}",
            SERIAL_PREFIX="CMP",
            SERIAL_WIDTH=6,
        )
        assert await SerialAllocator(custom).reserve(session) == "CMP000001"
