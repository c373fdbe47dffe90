from typing import Optional
from sqlmodel import Field, SQLModel


class Complaint(SQLModel, table=True):
    __tablename__ = "complaints"

    serial: str = Field(primary_key=True, max_length=20)
    farmer_name: Optional[str] = None
    complaint_brief: Optional[str] = None
    # Dates are stored as canonical DD-MM-YYYY text
    material_supply_date: Optional[str] = Field(default=None, max_length=10)
    complain_date: Optional[str] = Field(default=None, max_length=10)
    solve_date: Optional[str] = Field(default=None, max_length=10)
    close_date: Optional[str] = Field(default=None, max_length=10)
    solve_days: Optional[int] = None
    close_days: Optional[int] = None
    complain_type: Optional[str] = None
    dealer_name: Optional[str] = None
    area_manager: Optional[str] = None
    status: Optional[str] = None
    solution_description: Optional[str] = None
    complain_form: Optional[str] = None
    photo: Optional[str] = None
    video: Optional[str] = None
    replacement_received: Optional[str] = None
