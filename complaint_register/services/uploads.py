"""
Storage of uploaded attachments and spreadsheets
"""
import shutil
import time
from pathlib import Path
from typing import Dict, List, Union

from starlette.datastructures import FormData, UploadFile

from complaint_register.exceptions import UploadLimitError
from complaint_register.logging_config import logger
from complaint_register.services.record_mapper import ATTACHMENT_FIELDS


def save_upload(upload: UploadFile, upload_dir: Union[str, Path]) -> str:
    """
    Store an uploaded file under the upload directory

    Args:
        upload: Incoming multipart file
        upload_dir: Destination directory, created if missing

    Returns:
        Stored filename, <epoch-millis>-<original basename>
    """
    directory = Path(upload_dir)
    directory.mkdir(parents=True, exist_ok=True)

    original = Path(upload.filename or "upload.bin").name
    filename = f"{int(time.time() * 1000)}-{original}"
    with (directory / filename).open("wb") as dest:
        shutil.copyfileobj(upload.file, dest)
    upload.file.close()

    logger.debug(f"Stored upload {filename}")
    return filename


def _files_in(form: FormData, name: str) -> List[UploadFile]:
    return [item for item in form.getlist(name) if isinstance(item, UploadFile) and item.filename]


def collect_uploads(form: FormData, upload_dir: Union[str, Path]) -> Dict[str, List[str]]:
    """
    Store the attachments of a complaint form

    Empty file inputs are ignored. Limits are checked for every field before
    anything is written.

    Raises:
        UploadLimitError: If a field carries more files than it accepts
    """
    pending = {}
    for name, (_, limit) in ATTACHMENT_FIELDS.items():
        files = _files_in(form, name)
        if len(files) > limit:
            raise UploadLimitError(name, limit, len(files))
        pending[name] = files

    return {
        name: [save_upload(upload, upload_dir) for upload in files]
        for name, files in pending.items()
    }


def discard_uploads(uploads: Dict[str, List[str]], upload_dir: Union[str, Path]) -> None:
    """Remove attachments stored for a submission that was not saved"""
    directory = Path(upload_dir)
    for names in uploads.values():
        for name in names:
            (directory / name).unlink(missing_ok=True)
            logger.debug(f"Discarded upload {name}")
