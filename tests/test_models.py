"""
Unit tests for database models
"""
from complaint_register.models import Complaint, SerialSequence


class TestComplaintModel:
    """Test Complaint model defaults"""

    def test_complaint_creation(self):
        """Test creating a complete complaint"""
        complaint = Complaint(
            serial="C0001",
            farmer_name="John Doe",
            complaint_brief="Water shortage",
            complain_date="05-01-2024",
            solve_date="10-01-2024",
            solve_days=5,
            replacement_received="No"
        )

        assert complaint.serial == "C0001"
        assert complaint.farmer_name == "John Doe"
        assert complaint.solve_days == 5
        assert complaint.replacement_received == "No"

    def test_optional_fields_default_to_none(self):
        """Test that everything but the serial is optional"""
        complaint = Complaint(serial="C0002")

        assert complaint.farmer_name is None
        assert complaint.close_date is None
        assert complaint.close_days is None
        assert complaint.complain_form is None
        assert complaint.photo is None
        assert complaint.video is None

    def test_table_definition(self):
        """Test that the serial is the primary key"""
        table = Complaint.__table__

        assert table.name == "complaints"
        assert [column.name for column in table.primary_key.columns] == ["serial"]


class TestSerialSequenceModel:
    """Test SerialSequence model"""

    def test_sequence_defaults(self):
        """Test that a new sequence starts at zero"""
        sequence = SerialSequence(name="complaint")

        assert sequence.name == "complaint"
        assert sequence.current_value == 0
        assert SerialSequence.__table__.name == "serial_sequences"
