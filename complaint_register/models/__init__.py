# Database models package
from .complaint import Complaint
from .sequence import SerialSequence

__all__ = ["Complaint", "SerialSequence"]
