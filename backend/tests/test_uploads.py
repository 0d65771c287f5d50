"""upload.uploadEmployeeDocument with the local backend and a faked object store."""

import base64
import os

import httpx
import pytest

from app.services.storage_service import HttpObjectStorage, LocalStorage, StorageError
from app.services.upload_service import decode_payload, storage_key
from app.validation import ValidationError

from conftest import error_code, result


PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"fake-image-data"
PDF_BYTES = b"%PDF-1.4 fake license"


def b64(data):
    return base64.b64encode(data).decode("ascii")


def upload(rpc, employee_id, document_type, data, **extra):
    return rpc.mutate("upload.uploadEmployeeDocument", {
        "employeeId": employee_id,
        "documentType": document_type,
        "fileData": data,
        **extra,
    })


class TestLocalStorage:
    def test_profile_picture_sets_url_and_is_served(self, app, user_rpc, employee):
        data = result(upload(
            user_rpc, employee.id, "profile_picture",
            f"data:image/png;base64,{b64(PNG_BYTES)}",
            fileName="me.png", contentType="image/png",
        ))

        url = data["url"]
        assert url.startswith(f"/uploads/employees/{employee.id}/profile_picture-")
        assert url.endswith(".png")
        assert data["employee"]["profilePictureUrl"] == url
        assert data["employee"]["idDocuments"] == []

        path = os.path.join(app.config["UPLOAD_FOLDER"], data["key"])
        with open(path, "rb") as fh:
            assert fh.read() == PNG_BYTES

        served = user_rpc.client.get(url)
        assert served.status_code == 200
        assert served.data == PNG_BYTES

    def test_other_documents_are_appended(self, user_rpc, employee):
        first = result(upload(user_rpc, employee.id, "drivers_license", b64(PDF_BYTES), fileName="license.pdf"))
        second = result(upload(user_rpc, employee.id, "ssn_card", b64(PDF_BYTES), contentType="application/pdf"))

        profile = second["employee"]
        assert profile["profilePictureUrl"] is None
        assert [d["type"] for d in profile["idDocuments"]] == ["drivers_license", "ssn_card"]
        assert profile["idDocumentUrl"] == second["url"]
        assert profile["idDocumentType"] == "ssn_card"
        assert first["url"].endswith(".pdf")
        assert second["url"].endswith(".pdf")

    def test_invalid_payload(self, user_rpc, employee):
        response = upload(user_rpc, employee.id, "drivers_license", "%%% not base64 %%%")
        assert error_code(response) == "BAD_REQUEST"

    def test_unknown_employee(self, user_rpc):
        response = upload(user_rpc, "missing", "drivers_license", b64(PDF_BYTES))
        assert error_code(response) == "NOT_FOUND"

    def test_requires_authentication(self, anon, employee):
        assert upload(anon, employee.id, "drivers_license", b64(PDF_BYTES)).status_code == 401

    def test_served_files_require_a_session(self, user_rpc, anon, employee):
        url = result(upload(user_rpc, employee.id, "drivers_license", b64(PDF_BYTES), fileName="license.pdf"))["url"]

        response = anon.client.get(url)
        assert response.status_code == 401
        assert error_code(response) == "UNAUTHORIZED"
        assert user_rpc.client.get(url).data == PDF_BYTES

    def test_path_traversal_is_refused(self, tmp_path):
        storage = LocalStorage(tmp_path)
        with pytest.raises(StorageError):
            storage.path_for("../outside.txt")


class TestObjectStore:
    def test_upload_goes_to_object_store(self, app, user_rpc, employee):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json={"Key": "ok"})

        app.extensions["object_storage"] = HttpObjectStorage(
            "https://store.test", "service-key", "employee-documents",
            transport=httpx.MockTransport(handler),
        )

        data = result(upload(user_rpc, employee.id, "profile_picture", b64(PNG_BYTES), contentType="image/png"))

        sent = requests[0]
        assert sent.method == "POST"
        assert sent.url.path.startswith(f"/storage/v1/object/employee-documents/employees/{employee.id}/profile_picture-")
        assert sent.headers["x-upsert"] == "true"
        assert sent.headers["Content-Type"] == "image/png"
        assert sent.content == PNG_BYTES
        assert data["url"] == f"https://store.test/storage/v1/object/public/employee-documents/{data['key']}"
        assert data["employee"]["profilePictureUrl"] == data["url"]

    def test_object_store_failure_leaves_employee_unchanged(self, app, user_rpc, employee):
        app.extensions["object_storage"] = HttpObjectStorage(
            "https://store.test", "service-key", "employee-documents",
            transport=httpx.MockTransport(lambda request: httpx.Response(500, text="boom")),
        )

        response = upload(user_rpc, employee.id, "profile_picture", b64(PNG_BYTES))
        assert response.status_code == 500
        assert error_code(response) == "INTERNAL_SERVER_ERROR"

        profile = result(user_rpc.query("employees.getById", {"id": employee.id}))
        assert profile["profilePictureUrl"] is None

    def test_uploads_route_only_serves_local_files(self, app, user_rpc):
        app.extensions["object_storage"] = HttpObjectStorage("https://store.test", "k", "b")
        assert user_rpc.client.get("/uploads/employees/x/y.png").status_code == 404


def test_storage_key_layout():
    key = storage_key("emp-1", "Drivers License", file_name="scan.JPG", content_type=None, now_ms=1700000000000)
    assert key == "employees/emp-1/drivers-license-1700000000000.jpg"

    key = storage_key("emp-1", "profile_picture", file_name=None, content_type="image/png", now_ms=1)
    assert key == "employees/emp-1/profile_picture-1.png"

    key = storage_key("emp-1", "other", file_name=None, content_type=None, now_ms=1)
    assert key == "employees/emp-1/other-1.bin"


def test_decode_payload():
    assert decode_payload(b64(PDF_BYTES)) == PDF_BYTES
    assert decode_payload(f"data:application/pdf;base64,{b64(PDF_BYTES)}") == PDF_BYTES
    with pytest.raises(ValidationError):
        decode_payload("")
