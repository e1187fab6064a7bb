"""
Employee Gateway service package.

The gateway fronts the upstream employee records API, adding:
- Cache-aside reads of the full employee listing, evicted on every write
- Retry with exponential backoff when the upstream rate limits
- Aggregate queries (name search, highest salary, top earners)

Structure:
- app.main: FastAPI app, routes, and wiring.
- app.models: Employee records, inputs and the upstream envelope.
- app.adapters: HTTP client for the upstream API.
- app.caching: Listing cache.
- app.domain: Aggregations and the employee service.
"""
