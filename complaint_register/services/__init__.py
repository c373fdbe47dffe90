# Business logic services package
from .record_mapper import RecordMapper, MappedRecord
from .serials import SerialAllocator, format_serial
from .complaint_store import ComplaintStore, ComplaintPage
from .import_service import ImportReconciler, ImportReport
from .export_service import ExportService

__all__ = [
    "RecordMapper",
    "MappedRecord",
    "SerialAllocator",
    "format_serial",
    "ComplaintStore",
    "ComplaintPage",
    "ImportReconciler",
    "ImportReport",
    "ExportService"
]
