"""
Routes for spreadsheet import and export
"""
import asyncio
import os
import tempfile
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile
from fastapi.responses import FileResponse, RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.background import BackgroundTask

from complaint_register.config import Settings, get_settings
from complaint_register.database import get_db, get_session_factory
from complaint_register.exceptions import SpreadsheetReadError
from complaint_register.logging_config import logger
from complaint_register.routes.web import templates
from complaint_register.services.complaint_store import ComplaintStore
from complaint_register.services.export_service import ExportService
from complaint_register.services.import_service import ImportReconciler
from complaint_register.services.uploads import save_upload

router = APIRouter(tags=["spreadsheets"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _temporary_xlsx() -> str:
    fd, path = tempfile.mkstemp(suffix=".xlsx")
    os.close(fd)
    return path


@router.post("/upload-excel")
async def upload_excel(
    request: Request,
    excel_file: Optional[UploadFile] = File(None, alias="excelFile"),
    session_factory=Depends(get_session_factory),
    settings: Settings = Depends(get_settings)
):
    """Import every row of an uploaded spreadsheet"""
    if excel_file is None or not excel_file.filename:
        raise HTTPException(status_code=400, detail="No file uploaded.")

    filename = await asyncio.to_thread(save_upload, excel_file, settings.UPLOAD_DIR)
    stored = Path(settings.UPLOAD_DIR) / filename
    reconciler = ImportReconciler(session_factory, settings)
    try:
        report = await reconciler.import_file(stored)
    except SpreadsheetReadError as e:
        logger.error(f"Error processing Excel: {str(e)}")
        raise HTTPException(status_code=400, detail="Error processing Excel.")
    except Exception as e:
        logger.error(f"Error inserting data: {str(e)}")
        raise HTTPException(status_code=500, detail="Error inserting data.")

    if report.succeeded:
        return RedirectResponse("/", status_code=303)
    return templates.TemplateResponse(request, "import-report.html", {"report": report})


@router.get("/download-sample-excel")
async def download_sample_excel():
    """Stream the import template; the generated file is deleted once sent"""
    path = _temporary_xlsx()
    try:
        await asyncio.to_thread(ExportService().build_sample_workbook, path)
    except Exception as e:
        os.remove(path)
        logger.error(f"Error generating sample Excel: {str(e)}")
        raise HTTPException(status_code=500, detail="Error downloading the sample Excel file.")

    return FileResponse(
        path,
        media_type=XLSX_MEDIA_TYPE,
        filename="sample_complaints.xlsx",
        background=BackgroundTask(os.remove, path),
    )


@router.get("/export-excel")
async def export_excel(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings)
):
    """Download every complaint in the import layout"""
    path = _temporary_xlsx()
    try:
        complaints = await ComplaintStore(db, settings).list_all()
        await asyncio.to_thread(ExportService().export_complaints, complaints, path)
    except Exception as e:
        os.remove(path)
        logger.error(f"Error exporting complaints: {str(e)}")
        raise HTTPException(status_code=500, detail="Error exporting complaints.")

    return FileResponse(
        path,
        media_type=XLSX_MEDIA_TYPE,
        filename="complaints.xlsx",
        background=BackgroundTask(os.remove, path),
    )
