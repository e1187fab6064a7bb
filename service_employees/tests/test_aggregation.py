"""
Unit tests for listing aggregations.
"""

import pytest

from service_employees.app.domain.aggregation import (
    derive_email,
    highest_salary,
    search_by_name,
    top_earners,
)
from service_employees.app.models import EmployeeRecord


def _employee(name: str, salary: int) -> EmployeeRecord:
    return EmployeeRecord(id=name.lower().replace(" ", "-"), name=name, salary=salary, age=30, title="Staff")


@pytest.fixture
def listing():
    return [
        _employee("John Doe", 100000),
        _employee("Jane Smith", 150000),
        _employee("Bob Johnson", 120000),
        _employee("johnny cash", 90000),
    ]


class TestSearchByName:

    def test_case_insensitive(self, listing):
        names = [employee.name for employee in search_by_name(listing, "JOHN")]
        assert names == ["John Doe", "Bob Johnson", "johnny cash"]

    def test_empty_search_returns_all(self, listing):
        assert search_by_name(listing, "") == listing

    def test_no_match(self, listing):
        assert search_by_name(listing, "zelda") == []

    def test_empty_listing(self):
        assert search_by_name([], "john") == []


class TestHighestSalary:

    def test_max(self, listing):
        assert highest_salary(listing) == 150000

    def test_empty_is_zero(self):
        assert highest_salary([]) == 0


class TestTopEarners:

    def test_order(self, listing):
        assert top_earners(listing, 3) == ["Jane Smith", "Bob Johnson", "John Doe"]

    def test_length_is_min_of_limit_and_size(self, listing):
        assert len(top_earners(listing, 10)) == len(listing)
        assert len(top_earners(listing, 2)) == 2

    def test_salaries_non_increasing(self, listing):
        by_name = {employee.name: employee.salary for employee in listing}
        salaries = [by_name[name] for name in top_earners(listing)]
        assert salaries == sorted(salaries, reverse=True)

    def test_ties_keep_input_order(self):
        tied = [_employee("A", 5), _employee("B", 7), _employee("C", 5), _employee("D", 7)]
        assert top_earners(tied, 4) == ["B", "D", "A", "C"]

    def test_default_limit_is_ten(self):
        many = [_employee(f"E{i}", i) for i in range(15)]
        assert top_earners(many) == [f"E{i}" for i in range(14, 4, -1)]

    def test_non_positive_limit(self, listing):
        assert top_earners(listing, 0) == []

    def test_empty_listing(self):
        assert top_earners([]) == []


class TestDeriveEmail:

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("Jane Q Smith", "jane.smith@company.com"),
            ("John Doe", "john.doe@company.com"),
            ("  Ada   Lovelace  ", "ada.lovelace@company.com"),
            ("Madonna", "madonna@company.com"),
            ("  Cher ", "cher@company.com"),
        ],
    )
    def test_derive_email(self, name, expected):
        assert derive_email(name) == expected
