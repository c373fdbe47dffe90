"""
Web routes for the complaint register HTML pages
"""
import asyncio
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.ext.asyncio import AsyncSession

from complaint_register.config import Settings, get_settings
from complaint_register.database import get_db
from complaint_register.exceptions import InvalidDateRangeError, UploadLimitError
from complaint_register.logging_config import logger
from complaint_register.models import Complaint
from complaint_register.services.complaint_store import ALL, SORTABLE_FIELDS, ComplaintStore
from complaint_register.services.dates import to_input_date
from complaint_register.services.record_mapper import RecordMapper
from complaint_register.services.serials import format_serial
from complaint_register.services.uploads import collect_uploads, discard_uploads

router = APIRouter(tags=["web"])
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))

SORT_PATTERN = "^(" + "|".join(SORTABLE_FIELDS) + ")$"


def _parse_page_size(raw: Optional[str], default: int):
    if raw is None or raw == "":
        return default
    if raw == ALL:
        return ALL
    try:
        size = int(raw)
    except ValueError:
        raise HTTPException(status_code=400, detail="pageSize must be a positive number or 'all'")
    if size < 1:
        raise HTTPException(status_code=400, detail="pageSize must be a positive number or 'all'")
    return size


def _edit_view(complaint: Complaint) -> Dict[str, Any]:
    """Complaint fields keyed by form name, dates reformatted for date inputs"""
    return {
        "serial": complaint.serial,
        "farmerName": complaint.farmer_name,
        "complaintBrief": complaint.complaint_brief,
        "materialSupplyDate": to_input_date(complaint.material_supply_date),
        "complainDate": to_input_date(complaint.complain_date),
        "solveDate": to_input_date(complaint.solve_date),
        "closeDate": to_input_date(complaint.close_date),
        "complainType": complaint.complain_type,
        "dealerName": complaint.dealer_name,
        "areaManager": complaint.area_manager,
        "status": complaint.status,
        "solutionDescription": complaint.solution_description,
        "replacementReceived": complaint.replacement_received,
        "complainForm": complaint.complain_form,
        "photo": complaint.photo,
        "video": complaint.video,
    }


@router.get("/")
async def list_complaints(
    request: Request,
    page: int = Query(1, ge=1),
    page_size: Optional[str] = Query(None, alias="pageSize"),
    sort_by: str = Query("serial", alias="sortBy", pattern=SORT_PATTERN),
    order: str = Query("asc", pattern="^(asc|desc)$"),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings)
):
    """Render the paginated complaint list"""
    size = _parse_page_size(page_size, settings.DEFAULT_PAGE_SIZE)
    try:
        result = await ComplaintStore(db, settings).list_page(page, size, sort_by, order)
    except Exception as e:
        logger.error(f"Error fetching complaints: {str(e)}")
        raise HTTPException(status_code=500, detail="Error loading complaints.")

    # Position-based numbering shown next to the stored serial
    rows = [
        {
            "complaint": complaint,
            "display_serial": format_serial(
                result.offset + index, settings.SERIAL_PREFIX, settings.SERIAL_WIDTH
            ),
        }
        for index, complaint in enumerate(result.items)
    ]

    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "rows": rows,
            "current_page": result.page,
            "page_size": result.page_size,
            "total": result.total,
            "is_last_page": result.is_last_page,
            "sort_by": sort_by,
            "order": order,
        },
    )


@router.get("/add")
async def add_complaint(request: Request):
    """Render a blank complaint form"""
    return templates.TemplateResponse(request, "edit.html", {"complaint": None})


@router.get("/edit/{serial}")
async def edit_complaint(
    request: Request,
    serial: str,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings)
):
    """Render the form populated with an existing complaint"""
    logger.debug(f"Fetching complaint with serial: {serial}")
    try:
        complaint = await ComplaintStore(db, settings).get(serial)
    except Exception as e:
        logger.error(f"Error fetching complaint {serial}: {str(e)}")
        raise HTTPException(status_code=500, detail="Error loading complaint data.")

    if complaint is None:
        logger.info(f"No complaint found with serial: {serial}")
        raise HTTPException(status_code=404, detail="Complaint not found.")

    return templates.TemplateResponse(request, "edit.html", {"complaint": _edit_view(complaint)})


@router.get("/delete/{serial}")
async def delete_complaint(
    serial: str,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings)
):
    """Delete a complaint and return to the list"""
    try:
        await ComplaintStore(db, settings).delete(serial)
    except Exception as e:
        logger.error(f"Error deleting complaint {serial}: {str(e)}")
        raise HTTPException(status_code=500, detail="Error deleting complaint.")
    return RedirectResponse("/", status_code=303)


@router.post("/save")
async def save_complaint(
    request: Request,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings)
):
    """Create a complaint, or update it when the form carries a serial"""
    form = await request.form()

    try:
        uploads = await asyncio.to_thread(collect_uploads, form, settings.UPLOAD_DIR)
    except UploadLimitError as e:
        raise HTTPException(status_code=400, detail=str(e))

    serial = form.get("serial") or form.get("srno")
    try:
        record = RecordMapper(settings).map_form(form, uploads, serial=serial)
    except InvalidDateRangeError as e:
        discard_uploads(uploads, settings.UPLOAD_DIR)
        raise HTTPException(status_code=400, detail=str(e))

    try:
        saved = await ComplaintStore(db, settings).save(record)
    except Exception as e:
        logger.error(f"Error saving complaint: {str(e)}")
        discard_uploads(uploads, settings.UPLOAD_DIR)
        raise HTTPException(status_code=500, detail="Error saving complaint.")

    if saved is None:
        logger.warning(f"Complaint {record.serial} no longer exists, nothing updated")
        discard_uploads(uploads, settings.UPLOAD_DIR)
    return RedirectResponse("/", status_code=303)


@router.post("/update-replacement/{serial}")
async def update_replacement(
    serial: str,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings)
):
    """Mark the replacement of a complaint as received"""
    try:
        await ComplaintStore(db, settings).mark_replacement_received(serial)
    except Exception as e:
        logger.error(f"Error updating replacement status: {str(e)}")
        raise HTTPException(status_code=500, detail="Error updating replacement status.")
    return RedirectResponse("/replacement-report", status_code=303)


@router.get("/replacement-report")
async def replacement_report(
    request: Request,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings)
):
    """List complaints still waiting for a replacement"""
    try:
        complaints = await ComplaintStore(db, settings).list_pending_replacements()
    except Exception as e:
        logger.error(f"Error fetching replacement complaints: {str(e)}")
        raise HTTPException(status_code=500, detail="Error loading replacement report.")
    return templates.TemplateResponse(request, "replacement-report.html", {"complaints": complaints})
