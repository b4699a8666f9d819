import io

import pytest

from src.hrmstech.hrmstech.core.exceptions import NotFoundError, ValidationError
from src.hrmstech.hrmstech.uploads.service import (
    FILE_TOO_LARGE,
    FILE_TYPE_NOT_ALLOWED,
    UploadService,
    format_file_size,
    storage_key,
    validate_file,
)
from src.hrmstech.hrmstech.uploads.storage import LocalFileStorage

ORG = "org-1"


def test_validate_file():
    assert validate_file(1024, "application/pdf").valid
    assert validate_file(10 * 1024 * 1024 + 1, "application/pdf").error == FILE_TOO_LARGE
    assert validate_file(10, "text/plain").error == FILE_TYPE_NOT_ALLOWED


@pytest.mark.parametrize(
    "size, expected",
    [(0, "0 Bytes"), (512, "512 Bytes"), (1536, "1.5 KB"), (1048576, "1 MB"), (5 * 1024 ** 3, "5 GB")],
)
def test_format_file_size(size, expected):
    assert format_file_size(size) == expected


def test_storage_key_layout():
    key = storage_key(ORG, "u1", "resume", "cv.pdf", millis=1700000000000)
    assert key == "organizations/org-1/employeeUploads/u1/resume_1700000000000_cv.pdf"


def test_storage_rejects_escaping_keys(tmp_path):
    storage = LocalFileStorage(tmp_path)
    with pytest.raises(ValueError):
        storage.save("../outside.txt", io.BytesIO(b"x"))


def test_upload_open_delete(repos, tmp_path):
    storage = LocalFileStorage(tmp_path)
    svc = UploadService(repos.documents, storage)

    doc = svc.upload(
        ORG,
        "u1",
        "governmentId",
        filename="../my id.png",
        content_type="image/png",
        size=4,
        stream=io.BytesIO(b"\x89PNG"),
    )

    assert doc.name == "my_id.png"
    assert doc.size == 4
    assert storage.exists(doc.storage_path)
    _, fh = svc.open(ORG, doc.document_id)
    with fh:
        assert fh.read() == b"\x89PNG"
    assert [d.document_id for d in svc.list_for_employee(ORG, "u1")] == [doc.document_id]

    svc.delete(ORG, doc.document_id)

    assert not storage.exists(doc.storage_path)
    with pytest.raises(NotFoundError):
        svc.get(ORG, doc.document_id)


def test_upload_rejects_bad_files(repos, tmp_path):
    svc = UploadService(repos.documents, LocalFileStorage(tmp_path), max_bytes=8)

    with pytest.raises(ValidationError, match="File type not allowed"):
        svc.upload(ORG, "u1", "resume", filename="a.exe", content_type="application/x-msdownload", size=1, stream=io.BytesIO(b"x"))
    with pytest.raises(ValidationError, match="No file provided"):
        svc.upload(ORG, "u1", "resume", filename="", content_type="application/pdf", size=1, stream=io.BytesIO(b"x"))
    # declared size lies; the written size is checked too
    with pytest.raises(ValidationError, match="10MB"):
        svc.upload(ORG, "u1", "resume", filename="a.pdf", content_type="application/pdf", size=1, stream=io.BytesIO(b"x" * 20))
    assert repos.documents.items == {}
