"""
Unit tests for shared errors and configuration.
"""

import pytest

from shared.config import get_config
from shared.errors import (
    DeleteFailedError,
    EmployeeNotFoundError,
    GatewayException,
    RateLimitExceededError,
    UpstreamUnavailableError,
)


class TestGatewayErrors:
    """Test cases for the error taxonomy."""

    @pytest.mark.parametrize(
        "error_cls,code,status",
        [
            (EmployeeNotFoundError, "NOT_FOUND", 404),
            (RateLimitExceededError, "RATE_LIMIT_EXCEEDED", 429),
            (UpstreamUnavailableError, "UPSTREAM_UNAVAILABLE", 500),
            (DeleteFailedError, "DELETE_FAILED", 500),
        ],
    )
    def test_codes_and_statuses(self, error_cls, code, status):
        error = error_cls("boom")

        assert isinstance(error, GatewayException)
        assert error.code == code
        assert error.status_code == status
        assert str(error) == "boom"

    def test_to_response(self):
        response = EmployeeNotFoundError("Employee with id 1 not found", details={"id": "1"}).to_response()

        assert response.code == "NOT_FOUND"
        assert response.status == 404
        assert response.message == "Employee with id 1 not found"
        assert response.details == {"id": "1"}
        assert response.timestamp is not None
        assert response.trace_id is None


class TestConfig:
    """Test cases for ServiceConfig."""

    def test_defaults(self, monkeypatch):
        for name in ("EMPLOYEE_GATEWAY_RETRY_MAX_ATTEMPTS", "EMPLOYEE_GATEWAY_CACHE_TTL_SECONDS"):
            monkeypatch.delenv(name, raising=False)

        config = get_config("employee-gateway", 8111)

        assert config.service_name == "employee-gateway"
        assert config.port == 8111
        assert config.retry_max_attempts == 3
        assert config.retry_initial_delay_seconds == 2.0
        assert config.retry_multiplier == 2
        assert config.cache_ttl_seconds == 60.0
        assert config.employee_api_connect_timeout == 5.0
        assert config.employee_api_read_timeout == 30.0

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("EMPLOYEE_GATEWAY_EMPLOYEE_API_BASE_URL", "http://mock:9000/api/v1/employee")
        monkeypatch.setenv("EMPLOYEE_GATEWAY_RETRY_MAX_ATTEMPTS", "5")
        monkeypatch.setenv("EMPLOYEE_GATEWAY_CACHE_TTL_SECONDS", "15")

        config = get_config("employee-gateway", 8111)

        assert config.employee_api_base_url == "http://mock:9000/api/v1/employee"
        assert config.retry_max_attempts == 5
        assert config.cache_ttl_seconds == 15.0

    def test_explicit_overrides(self):
        config = get_config("employee-gateway", 8111, retry_initial_delay_seconds=0.5)
        assert config.retry_initial_delay_seconds == 0.5
