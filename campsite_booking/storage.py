# campsite_booking/storage.py
import logging
import shutil
import time
import uuid
from pathlib import Path
from typing import Optional

from fastapi import Request, UploadFile

logger = logging.getLogger(__name__)


class FileStore:
    """Keeps uploaded spot images on local disk and hands back the URL they are served under."""

    def __init__(self, directory: str, url_prefix: str = "/uploads"):
        self.directory = Path(directory)
        self.url_prefix = url_prefix.rstrip("/")
        self.directory.mkdir(parents=True, exist_ok=True)

    def save(self, upload: Optional[UploadFile]) -> Optional[str]:
        if upload is None or not upload.filename:
            return None

        ext = Path(upload.filename).suffix.lower()
        # Unique filename based on timestamp
        name = f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}{ext}"
        with (self.directory / name).open("wb") as out:
            shutil.copyfileobj(upload.file, out)

        logger.info("Stored upload %s as %s", upload.filename, name)
        return f"{self.url_prefix}/{name}"


def get_file_store(request: Request) -> FileStore:
    return request.app.state.file_store
