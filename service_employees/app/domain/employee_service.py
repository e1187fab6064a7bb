"""
Employee operations exposed by the gateway.
"""

from typing import List

from shared.errors import DeleteFailedError
from shared.logging import get_logger
from service_employees.app.adapters.employee_client import EmployeeApiClient
from service_employees.app.caching.listing_cache import EmployeeListingCache
from service_employees.app.domain.aggregation import (
    DEFAULT_TOP_EARNERS,
    derive_email,
    highest_salary,
    search_by_name,
    top_earners,
)
from service_employees.app.models import EmployeeInput, EmployeeRecord


class EmployeeService:
    """Coordinates the listing cache and the upstream client.

    Reads of the full listing go through the cache; lookups by id and all
    writes go straight to the upstream, and every successful write evicts
    the cached listing.
    """

    def __init__(self, client: EmployeeApiClient, cache: EmployeeListingCache):
        self.client = client
        self.cache = cache
        self.logger = get_logger("gateway.employee_service")

    async def get_all_employees(self) -> List[EmployeeRecord]:
        cached = self.cache.get()
        if cached is not None:
            self.logger.debug("Serving employee listing from cache", count=len(cached))
            return cached

        generation = self.cache.generation
        employees = await self.client.list_all()
        self.cache.put(employees, generation=generation)
        return list(employees)

    async def search_employees_by_name(self, search_string: str) -> List[EmployeeRecord]:
        self.logger.info("Searching employees by name", search_string=search_string)
        return search_by_name(await self.get_all_employees(), search_string)

    async def get_employee_by_id(self, employee_id: str) -> EmployeeRecord:
        return await self.client.get_by_id(employee_id)

    async def get_highest_salary(self) -> int:
        return highest_salary(await self.get_all_employees())

    async def get_top_ten_highest_earning_employee_names(self) -> List[str]:
        return top_earners(await self.get_all_employees(), DEFAULT_TOP_EARNERS)

    async def create_employee(self, employee_input: EmployeeInput) -> EmployeeRecord:
        email = derive_email(employee_input.name)
        self.logger.info("Creating employee", name=employee_input.name, email=email)

        employee = await self.client.create(employee_input, email=email)
        self.cache.invalidate()
        return employee

    async def delete_employee_by_id(self, employee_id: str) -> str:
        """Delete by id; returns the deleted employee's name.

        The upstream deletes by name, so the record is looked up first
        (bypassing the cache) to learn it.
        """
        self.logger.info("Deleting employee by id", employee_id=employee_id)
        employee = await self.client.get_by_id(employee_id)

        if not await self.client.delete_by_name(employee.name):
            raise DeleteFailedError(
                f"Failed to delete employee with id: {employee_id}",
                details={"employee_id": employee_id, "name": employee.name}
            )

        self.cache.invalidate()
        self.logger.info("Deleted employee", employee_id=employee_id, name=employee.name)
        return employee.name
