"""
Pure aggregations over an employee listing.
"""

from typing import List, Sequence

from service_employees.app.models import EmployeeRecord

EMAIL_DOMAIN = "company.com"
DEFAULT_TOP_EARNERS = 10


def search_by_name(employees: Sequence[EmployeeRecord], search_string: str) -> List[EmployeeRecord]:
    """Employees whose name contains ``search_string``, ignoring case."""
    needle = search_string.lower()
    return [employee for employee in employees if needle in employee.name.lower()]


def highest_salary(employees: Sequence[EmployeeRecord]) -> int:
    """Highest salary in the listing, 0 when it is empty."""
    return max((employee.salary for employee in employees), default=0)


def top_earners(employees: Sequence[EmployeeRecord], limit: int = DEFAULT_TOP_EARNERS) -> List[str]:
    """Names of the ``limit`` best paid employees, highest first.

    ``sorted`` is stable, so equal salaries keep their listing order.
    """
    if limit <= 0:
        return []
    ranked = sorted(employees, key=lambda employee: employee.salary, reverse=True)
    return [employee.name for employee in ranked[:limit]]


def derive_email(full_name: str) -> str:
    """Build ``first.last@company.com`` from a display name.

    Single-token names become ``name@company.com``.
    """
    parts = full_name.split()
    if len(parts) >= 2:
        return f"{parts[0].lower()}.{parts[-1].lower()}@{EMAIL_DOMAIN}"
    return f"{''.join(full_name.split()).lower()}@{EMAIL_DOMAIN}"
