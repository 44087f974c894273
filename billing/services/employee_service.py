"""
Employee lookups shared by checkout and stock adjustments.
"""
from typing import Optional

from billing.exceptions import InvalidRequestError
from billing.models import Employee
from billing.utils.number_utils import to_db_id


def require_active_employee(session, employee_id: int) -> Employee:
    """
    Raises:
        InvalidRequestError: If the employee does not exist or is inactive
    """
    employee = session.query(Employee).filter(Employee.id == employee_id).first()
    if employee is None or not employee.active:
        raise InvalidRequestError(
            f'Employee with ID {employee_id} not found or inactive.',
            payload={'employee_id': employee_id}
        )
    return employee


def resolve_optional_employee(session, employee_id) -> Optional[int]:
    """
    Validate an optional employee reference taken from a request body.

    Returns None when no employee was given, otherwise the id of an active
    employee.

    Raises:
        InvalidRequestError: If the value is not a valid id or names no
            active employee
    """
    if employee_id is None or employee_id == '':
        return None

    parsed = to_db_id(employee_id)
    if parsed is None:
        raise InvalidRequestError('Invalid employee_id', payload={'employee_id': employee_id})
    return require_active_employee(session, parsed).id
