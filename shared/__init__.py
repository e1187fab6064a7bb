"""
Shared utilities for the Employee Gateway.

This package aggregates common building blocks consumed by the gateway:

- config: Service configuration via pydantic-settings
- logging: Structured logging with trace correlation
- metrics: Prometheus metrics helpers
- tracing: OpenTelemetry tracing config
- errors: Canonical error types and responses
- retry: Rate-limit aware retry executor
- base_service: FastAPI service skeleton

Do not import from service_* packages into shared/.
"""
