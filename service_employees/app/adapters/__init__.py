"""
Adapters package for the Employee Gateway.

Contains the HTTP client wrapper for the upstream employee API. The
adapter encapsulates:

- Base URL and request shapes
- The rate-limit retry policy
- Error handling that maps to shared errors

Keep adapters thin and side-effect free outside of explicit calls.
"""

from .employee_client import EmployeeApiClient

__all__ = [
    "EmployeeApiClient",
]
