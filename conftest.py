"""
Shared pytest fixtures: an in-memory fake of the upstream employee API.
"""

import json
import uuid
from collections import Counter
from typing import Any, Dict, List, Optional

import httpx
import pytest

UPSTREAM_BASE_URL = "http://upstream.test/api/v1/employee"
UPSTREAM_PATH = "/api/v1/employee"


class FakeUpstream:
    """Stateful stand-in for the employee API behind ``httpx.MockTransport``."""

    def __init__(self, employees: Optional[List[Dict[str, Any]]] = None):
        self.employees: Dict[str, Dict[str, Any]] = {}
        for employee in employees or []:
            self.employees[employee["id"]] = dict(employee)
        self.calls: Counter = Counter()
        self.requests: List[httpx.Request] = []
        self.rate_limit_next = 0
        self.fail_next: Optional[int] = None
        self.delete_result: Optional[bool] = None

    @staticmethod
    def employee(employee_id: str, name: str, salary: int, age: int = 30, title: str = "Engineer") -> Dict[str, Any]:
        return {
            "id": employee_id,
            "employee_name": name,
            "employee_salary": salary,
            "employee_age": age,
            "employee_title": title,
            "employee_email": "",
        }

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self.transport())

    def handle(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.calls[(request.method, path)] += 1
        self.requests.append(request)

        if self.rate_limit_next > 0:
            self.rate_limit_next -= 1
            return httpx.Response(429, json={"status": "Too many requests"})

        if self.fail_next is not None:
            status, self.fail_next = self.fail_next, None
            return httpx.Response(status, json={"status": "Failed", "error": "boom"})

        if path == UPSTREAM_PATH:
            if request.method == "GET":
                return self._envelope(list(self.employees.values()))
            if request.method == "POST":
                return self._create(json.loads(request.content))
            if request.method == "DELETE":
                return self._delete(json.loads(request.content)["name"])

        if path.startswith(UPSTREAM_PATH + "/") and request.method == "GET":
            employee = self.employees.get(path.rsplit("/", 1)[-1])
            if employee is None:
                return httpx.Response(404, json={"status": "Not found"})
            return self._envelope(employee)

        return httpx.Response(405, json={"status": "Method not allowed"})

    def count(self, method: str, path: str = UPSTREAM_PATH) -> int:
        return self.calls[(method, path)]

    def _create(self, body: Dict[str, Any]) -> httpx.Response:
        employee_id = str(uuid.uuid4())
        employee = self.employee(employee_id, body["name"], body["salary"], body["age"], body["title"])
        employee["employee_email"] = body.get("email", "")
        self.employees[employee_id] = employee
        return self._envelope(employee)

    def _delete(self, name: str) -> httpx.Response:
        if self.delete_result is not None:
            return self._envelope(self.delete_result)
        for employee_id, employee in list(self.employees.items()):
            if employee["employee_name"] == name:
                del self.employees[employee_id]
                return self._envelope(True)
        return self._envelope(False)

    @staticmethod
    def _envelope(data: Any) -> httpx.Response:
        return httpx.Response(200, json={"data": data, "status": "Successfully processed request."})


@pytest.fixture
def upstream_employees() -> List[Dict[str, Any]]:
    return [
        FakeUpstream.employee("id-1", "John Doe", 100000, 35, "Engineer"),
        FakeUpstream.employee("id-2", "Jane Smith", 150000, 41, "Director"),
        FakeUpstream.employee("id-3", "Bob Johnson", 120000, 28, "Analyst"),
    ]


@pytest.fixture
def fake_upstream(upstream_employees) -> FakeUpstream:
    return FakeUpstream(upstream_employees)
