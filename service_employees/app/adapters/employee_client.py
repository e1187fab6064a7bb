"""
Upstream employee API client for the gateway.
"""

import asyncio
import time
from typing import Any, Awaitable, Callable, Dict, List, Optional, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from shared.logging import get_logger
from shared.metrics import MetricsCollector
from shared.retry import AttemptOutcome, AttemptResult, RetryConfig, RetryExecutor
from shared.tracing import trace_operation
from service_employees.app.models import DeleteRequest, EmployeeInput, EmployeeRecord, UpstreamEnvelope

T = TypeVar("T")

_EMPLOYEE_LIST = TypeAdapter(List[EmployeeRecord])


class EmployeeApiClient:
    """Client for the upstream employee records API.

    Every operation is a single HTTP round trip run through a
    ``RetryExecutor``: HTTP 429 is retried with backoff, HTTP 404 on a
    lookup becomes ``EmployeeNotFoundError``, and every other failure
    becomes ``UpstreamUnavailableError``.
    """

    def __init__(
        self,
        base_url: str,
        *,
        retry_config: Optional[RetryConfig] = None,
        connect_timeout: float = 5.0,
        read_timeout: float = 30.0,
        http_client: Optional[httpx.AsyncClient] = None,
        metrics: Optional[MetricsCollector] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.base_url = base_url.rstrip('/')
        self.logger = get_logger("gateway.employee_client")
        self.metrics = metrics
        self.retry = RetryExecutor(
            retry_config or RetryConfig(),
            name="employee_api",
            sleep=sleep,
            on_retry=self._record_retry,
        )

        if http_client is None:
            http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(read_timeout, connect=connect_timeout),
            )
        http_client.event_hooks["request"].append(self._log_request)
        http_client.event_hooks["response"].append(self._log_response)
        self._client = http_client

    async def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._client.aclose()

    async def list_all(self) -> List[EmployeeRecord]:
        """Fetch every employee."""
        self.logger.info("Fetching all employees from upstream")

        async def _attempt() -> AttemptResult[List[EmployeeRecord]]:
            return await self._request(
                "list_all",
                "GET",
                self.base_url,
                parse=_EMPLOYEE_LIST.validate_python,
                empty_message="No data returned from API",
            )

        employees = await self.retry.execute(_attempt, "list_all")
        self.logger.info("Fetched employees", count=len(employees))
        return employees

    async def get_by_id(self, employee_id: str) -> EmployeeRecord:
        """Fetch a single employee. Raises ``EmployeeNotFoundError`` when absent."""
        self.logger.info("Fetching employee by id", employee_id=employee_id)
        not_found = f"Employee with id {employee_id} not found"

        async def _attempt() -> AttemptResult[EmployeeRecord]:
            result = await self._request(
                "get_by_id",
                "GET",
                f"{self.base_url}/{employee_id}",
                parse=EmployeeRecord.model_validate,
                empty_message=not_found,
                not_found_message=not_found,
            )
            if result.outcome is AttemptOutcome.NOT_FOUND:
                self.logger.warning("Employee not found", employee_id=employee_id)
            return result

        employee = await self.retry.execute(_attempt, "get_by_id")
        self.logger.info("Fetched employee", employee_id=employee_id, name=employee.name)
        return employee

    async def create(self, employee_input: EmployeeInput, email: Optional[str] = None) -> EmployeeRecord:
        """Create an employee, attaching the derived email to the submitted body."""
        self.logger.info("Creating employee", name=employee_input.name)
        body = employee_input.model_dump()
        if email:
            body["email"] = email

        async def _attempt() -> AttemptResult[EmployeeRecord]:
            return await self._request(
                "create",
                "POST",
                self.base_url,
                parse=EmployeeRecord.model_validate,
                empty_message="Failed to create employee",
                json=body,
            )

        employee = await self.retry.execute(_attempt, "create")
        self.logger.info("Created employee", employee_id=employee.id, name=employee.name)
        return employee

    async def delete_by_name(self, name: str) -> bool:
        """Delete an employee by display name; the upstream delete is name keyed."""
        self.logger.info("Deleting employee by name", name=name)
        body = DeleteRequest(name=name).model_dump()

        async def _attempt() -> AttemptResult[bool]:
            return await self._request(
                "delete_by_name",
                "DELETE",
                self.base_url,
                parse=_parse_bool,
                empty_message="Failed to delete employee",
                json=body,
            )

        deleted = await self.retry.execute(_attempt, "delete_by_name")
        self.logger.info("Delete call completed", name=name, deleted=deleted)
        return deleted

    async def _request(
        self,
        operation: str,
        method: str,
        url: str,
        *,
        parse: Callable[[Any], T],
        empty_message: str,
        not_found_message: Optional[str] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> AttemptResult[T]:
        """Perform one attempt and classify the outcome."""
        start = time.monotonic()
        with trace_operation(f"employee_api.{operation}", http_method=method, http_url=url):
            result = await self._send_once(method, url, parse, empty_message, not_found_message, json)

        if self.metrics is not None:
            self.metrics.record_upstream_request(operation, result.outcome.value, time.monotonic() - start)
        return result

    async def _send_once(
        self,
        method: str,
        url: str,
        parse: Callable[[Any], T],
        empty_message: str,
        not_found_message: Optional[str],
        json: Optional[Dict[str, Any]],
    ) -> AttemptResult[T]:
        try:
            response = await self._client.request(method, url, json=json)
        except httpx.HTTPError as exc:
            self.logger.error("Upstream transport error", method=method, url=url, error=str(exc))
            return AttemptResult.failed(f"API call failed: {exc}")

        if response.status_code == httpx.codes.TOO_MANY_REQUESTS:
            return AttemptResult.rate_limited(status_code=response.status_code)

        if response.status_code == httpx.codes.NOT_FOUND and not_found_message:
            return AttemptResult.not_found(not_found_message, status_code=response.status_code)

        if response.is_error:
            self.logger.error(
                "Upstream request failed",
                method=method,
                url=url,
                status_code=response.status_code,
                response=response.text
            )
            return AttemptResult.failed(
                f"API call failed: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
            )

        try:
            envelope = UpstreamEnvelope.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            return AttemptResult.failed(f"Malformed response from API: {exc}", status_code=response.status_code)

        if envelope.data is None:
            if not_found_message:
                return AttemptResult.not_found(not_found_message, status_code=response.status_code)
            return AttemptResult.failed(empty_message, status_code=response.status_code)

        try:
            return AttemptResult.ok(parse(envelope.data))
        except (ValueError, ValidationError) as exc:
            return AttemptResult.failed(f"Malformed response from API: {exc}", status_code=response.status_code)

    async def _log_request(self, request: httpx.Request) -> None:
        self.logger.info("Request", method=request.method, url=str(request.url))
        self.logger.debug("Request body", body=request.content.decode("utf-8", errors="replace"))

    async def _log_response(self, response: httpx.Response) -> None:
        self.logger.info("Response", url=str(response.request.url), status_code=response.status_code)

    def _record_retry(self, operation: str) -> None:
        if self.metrics is not None:
            self.metrics.increment_counter("upstream_retries_total", operation=operation)


def _parse_bool(data: Any) -> bool:
    if not isinstance(data, bool):
        raise ValueError(f"expected a boolean deletion result, got {data!r}")
    return data
