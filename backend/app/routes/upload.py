# Overview: RPC procedure for employee document uploads.

from ..rpc import Router
from ..services import upload_service
from ..validation import Field, optional, shape


router = Router("upload")


@router.mutation(
    "uploadEmployeeDocument",
    input=shape(
        employeeId=Field("string", min_length=1),
        documentType=Field("string", min_length=1, max_length=50),
        fileData=Field("string", min_length=1),
        fileName=optional("string", max_length=255),
        contentType=optional("string", max_length=100),
    ),
)
def upload_employee_document(ctx, data):
    """
    Decode a base64 file, store it and record the URL on the employee.

    Returns {"url": ..., "employee": {...}}.
    """
    employee, stored = upload_service.upload_employee_document(**data)
    return {"url": stored.url, "key": stored.key, "employee": employee.to_dict()}
