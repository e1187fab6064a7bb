"""
Employee Gateway service.
"""

import asyncio
from typing import Any, Awaitable, Callable, Dict, List, Optional

import httpx
from fastapi import APIRouter

from shared.base_service import BaseService
from shared.config import ServiceConfig
from shared.retry import RetryConfig
from service_employees.app.adapters.employee_client import EmployeeApiClient
from service_employees.app.caching.listing_cache import EmployeeListingCache
from service_employees.app.domain.employee_service import EmployeeService
from service_employees.app.models import EmployeeInput, EmployeeRecord

SERVICE_NAME = "employee-gateway"
DEFAULT_PORT = 8111
EMPLOYEE_PREFIX = "/api/v1/employee"


class EmployeeGatewayService(BaseService):
    """Gateway in front of the upstream employee API."""

    def __init__(
        self,
        config: Optional[ServiceConfig] = None,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        clock: Optional[Callable[[], float]] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        super().__init__(SERVICE_NAME, DEFAULT_PORT, config=config)

        self.api_client = EmployeeApiClient(
            self.config.employee_api_base_url,
            retry_config=RetryConfig(
                max_attempts=self.config.retry_max_attempts,
                initial_delay=self.config.retry_initial_delay_seconds,
                multiplier=self.config.retry_multiplier,
            ),
            connect_timeout=self.config.employee_api_connect_timeout,
            read_timeout=self.config.employee_api_read_timeout,
            http_client=http_client,
            metrics=self.metrics,
            sleep=sleep,
        )
        cache_kwargs: Dict[str, Any] = {"metrics": self.metrics}
        if clock is not None:
            cache_kwargs["clock"] = clock
        self.cache = EmployeeListingCache(self.config.cache_ttl_seconds, **cache_kwargs)
        self.employee_service = EmployeeService(self.api_client, self.cache)

        @self.app.on_event("shutdown")
        async def _shutdown():
            await self.api_client.close()

        self._setup_employee_routes()
        self._setup_cache_routes()

        # Expose service instance via app state for introspection/testing
        self.app.state.gateway_service = self

    def _setup_employee_routes(self):
        """Public employee operations. Fixed paths precede ``/{employee_id}``."""
        router = APIRouter(prefix=EMPLOYEE_PREFIX, tags=["employees"])
        service = self.employee_service

        @router.get("", response_model=List[EmployeeRecord])
        async def get_all_employees():
            self.logger.info("Get all employees")
            return await service.get_all_employees()

        @router.get("/search/{search_string}", response_model=List[EmployeeRecord])
        async def search_employees(search_string: str):
            return await service.search_employees_by_name(search_string)

        @router.get("/highestSalary", response_model=int)
        async def get_highest_salary():
            return await service.get_highest_salary()

        @router.get("/topTenHighestEarningEmployeeNames", response_model=List[str])
        async def get_top_ten_highest_earning_employee_names():
            return await service.get_top_ten_highest_earning_employee_names()

        @router.get("/{employee_id}", response_model=EmployeeRecord)
        async def get_employee_by_id(employee_id: str):
            return await service.get_employee_by_id(employee_id)

        @router.post("", response_model=EmployeeRecord)
        async def create_employee(employee_input: EmployeeInput):
            self.logger.info("Create employee", name=employee_input.name)
            return await service.create_employee(employee_input)

        @router.delete("/{employee_id}", response_model=str)
        async def delete_employee_by_id(employee_id: str):
            self.logger.info("Delete employee by id", employee_id=employee_id)
            return await service.delete_employee_by_id(employee_id)

        self.app.include_router(router)

    def _setup_cache_routes(self):
        @self.app.get("/api/v1/cache/stats")
        async def get_cache_stats():
            """Listing cache statistics."""
            return self.cache.get_stats()

    async def _check_dependencies(self) -> Dict[str, str]:
        return {"employee_api": self.api_client.base_url}


def create_app():
    """Create FastAPI application."""
    service = EmployeeGatewayService()
    return service.app


def main():
    service = EmployeeGatewayService()
    service.run()


if __name__ == "__main__":
    main()
