from .common import FUEL_GRADES
from .auth import User, SessionToken, USER_ROLES, LOGIN_METHODS
from .stations import GasStation
from .staff import Employee, EmployeeStation, EmployeeDocument, EMPLOYEE_ROLES, PROFILE_PICTURE
from .shifts import Shift, ShiftReport, SHIFT_STATUSES, REPORT_STATUSES
from .finance import Transaction, Expense, TRANSACTION_TYPES, EXPENSE_CATEGORIES
from .fuel import FuelDelivery, FuelDeliveryItem, FuelInventory

__all__ = [
    'FUEL_GRADES',
    'User', 'SessionToken', 'USER_ROLES', 'LOGIN_METHODS',
    'GasStation',
    'Employee', 'EmployeeStation', 'EmployeeDocument', 'EMPLOYEE_ROLES', 'PROFILE_PICTURE',
    'Shift', 'ShiftReport', 'SHIFT_STATUSES', 'REPORT_STATUSES',
    'Transaction', 'Expense', 'TRANSACTION_TYPES', 'EXPENSE_CATEGORIES',
    'FuelDelivery', 'FuelDeliveryItem', 'FuelInventory',
]
