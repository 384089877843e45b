"""Sample schema container for the AdventureWorks demo database."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Generic, TypeVar

T = TypeVar("T")


class Query(Generic[T]):
    """A queryable collection of rows."""


@dataclass
class Department:
    department_id: int
    name: str
    group_name: str


@dataclass
class Employee:
    business_entity_id: int
    job_title: str
    hire_date: date


@dataclass
class VEmployeeDepartmentHistory:
    business_entity_id: int
    first_name: str
    last_name: str
    department: str
    start_date: date
    end_date: date | None = None


class AdventureWorksContext:
    entity_types = (Department, Employee, VEmployeeDepartmentHistory)

    Departments: Query[Department]
    Employees: Query[Employee]
    VEmployeeDepartmentHistories: Query[VEmployeeDepartmentHistory]

    def __init__(self, connection_string: str) -> None:
        if not connection_string:
            raise ValueError("connection string is empty")
        self.connection_string = connection_string

    def close(self) -> None:
        pass
