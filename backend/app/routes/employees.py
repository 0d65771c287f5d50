# Overview: RPC procedures for employees and their station assignments.

from ..models import EMPLOYEE_ROLES
from ..rpc import Router
from ..services import employee_service
from ..validation import Field, NotFoundError, optional, shape


router = Router("employees")


@router.query("list")
def list_employees(ctx, data):
    return [employee.to_dict() for employee in employee_service.list_employees()]


@router.query("byStation", input=shape(stationId=Field("string", min_length=1)))
def list_by_station(ctx, data):
    employees = employee_service.list_employees_by_station(data["station_id"])
    return [employee.to_dict() for employee in employees]


@router.query("getById", input=shape(id=Field("string", min_length=1)))
def get_employee(ctx, data):
    employee = employee_service.get_employee(data["id"])
    if employee is None:
        raise NotFoundError("Employee not found")
    return employee.to_dict()


@router.mutation(
    "create",
    input=shape(
        firstName=Field("string", min_length=1, max_length=100),
        lastName=Field("string", min_length=1, max_length=100),
        role=Field("enum", choices=EMPLOYEE_ROLES),
        stationIds=Field("string_list", min_items=1),
        email=optional("email", max_length=320),
        phoneNumber=optional("string", max_length=20),
    ),
)
def create_employee(ctx, data):
    return employee_service.create_employee(**data).to_dict()


@router.mutation(
    "update",
    input=shape(
        id=Field("string", min_length=1),
        firstName=optional("string", min_length=1, max_length=100),
        lastName=optional("string", min_length=1, max_length=100),
        role=optional("enum", choices=EMPLOYEE_ROLES),
        stationIds=optional("string_list", min_items=1),
        email=optional("email", max_length=320),
        phoneNumber=optional("string", max_length=20),
        isActive=optional("bool"),
    ),
)
def update_employee(ctx, data):
    employee_id = data.pop("id")
    return employee_service.update_employee(employee_id, **data).to_dict()
