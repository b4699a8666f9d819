from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import BinaryIO, Optional, Sequence

from werkzeug.utils import secure_filename

from ..common.validators import require_non_empty
from ..core.constants import ALLOWED_UPLOAD_TYPES, MAX_UPLOAD_BYTES
from ..core.exceptions import NotFoundError, ValidationError
from .model import EmployeeDocument
from .repository import DocumentRepository
from .storage import LocalFileStorage

logger = logging.getLogger(__name__)

FILE_TOO_LARGE = "File size exceeds 10MB limit"
FILE_TYPE_NOT_ALLOWED = "File type not allowed. Only PDF, JPG, and PNG files are accepted."

_SIZE_UNITS = ("Bytes", "KB", "MB", "GB")


@dataclass(frozen=True)
class FileCheck:
    valid: bool
    error: Optional[str] = None


def validate_file(size: int, content_type: Optional[str], *, max_bytes: int = MAX_UPLOAD_BYTES) -> FileCheck:
    if size > max_bytes:
        return FileCheck(valid=False, error=FILE_TOO_LARGE)
    if content_type not in ALLOWED_UPLOAD_TYPES:
        return FileCheck(valid=False, error=FILE_TYPE_NOT_ALLOWED)
    return FileCheck(valid=True)


def format_file_size(size: int) -> str:
    """``1536`` -> ``"1.5 KB"``."""
    if size <= 0:
        return "0 Bytes"
    value, unit = float(size), 0
    while value >= 1024 and unit < len(_SIZE_UNITS) - 1:
        value /= 1024
        unit += 1
    return f"{round(value, 2):g} {_SIZE_UNITS[unit]}"


def storage_key(org_id: str, uid: str, document_type: str, filename: str, *, millis: int) -> str:
    return f"organizations/{org_id}/employeeUploads/{uid}/{document_type}_{millis}_{filename}"


class UploadService:
    def __init__(self, documents: DocumentRepository, storage: LocalFileStorage, *, max_bytes: int = MAX_UPLOAD_BYTES):
        self._documents = documents
        self._storage = storage
        self._max_bytes = max_bytes

    def upload(
        self,
        org_id: str,
        uid: str,
        document_type: str,
        *,
        filename: str,
        content_type: Optional[str],
        size: int,
        stream: BinaryIO,
    ) -> EmployeeDocument:
        if not org_id or not uid:
            raise ValidationError("Missing organization ID or employee ID")
        document_type = require_non_empty(document_type, "Document type")
        name = secure_filename(filename or "")
        if not name:
            raise ValidationError("No file provided")

        check = validate_file(size, content_type, max_bytes=self._max_bytes)
        if not check.valid:
            raise ValidationError(check.error)

        key = storage_key(org_id, uid, secure_filename(document_type), name, millis=int(time.time() * 1000))
        written = self._storage.save(key, stream)
        if written > self._max_bytes:
            self._storage.delete(key)
            raise ValidationError(FILE_TOO_LARGE)

        document_id = self._documents.create(
            org_id=org_id,
            uid=uid,
            document_type=document_type,
            name=name,
            size=written,
            content_type=content_type,
            storage_path=key,
        )
        logger.info("stored %s for %s/%s at %s", document_type, org_id, uid, key)
        return self.get(org_id, document_id)

    def get(self, org_id: str, document_id: int) -> EmployeeDocument:
        document = self._documents.get(org_id, int(document_id))
        if not document:
            raise NotFoundError("Document not found")
        return document

    def open(self, org_id: str, document_id: int) -> tuple[EmployeeDocument, BinaryIO]:
        document = self.get(org_id, document_id)
        return document, self._storage.open(document.storage_path)

    def list_for_employee(self, org_id: str, uid: str) -> Sequence[EmployeeDocument]:
        return self._documents.list_for_employee(org_id, uid)

    def delete(self, org_id: str, document_id: int) -> None:
        document = self.get(org_id, document_id)
        if not self._storage.delete(document.storage_path):
            logger.warning("file for document %s was already gone: %s", document.document_id, document.storage_path)
        self._documents.delete(org_id, document.document_id)
