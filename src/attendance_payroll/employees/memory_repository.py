from __future__ import annotations

import threading
from dataclasses import replace
from typing import Iterable, Optional, Sequence

from ..core.exceptions import ConcurrentUpdateError
from .model import Employee
from .repository import EmployeeRepository


class InMemoryEmployeeRepository(EmployeeRepository):
    """Dict-backed store. Entities are immutable, so sharing them is safe."""

    def __init__(self, employees: Iterable[Employee] = ()):
        self._lock = threading.Lock()
        self._by_id: dict[str, Employee] = {e.employee_id: e for e in employees}

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        with self._lock:
            return self._by_id.get(str(employee_id))

    def list_active(self, *, department: Optional[str] = None, role: Optional[str] = None) -> Sequence[Employee]:
        with self._lock:
            items = list(self._by_id.values())
        return [
            e
            for e in items
            if e.is_active
            and (department is None or e.department == department)
            and (role is None or e.role == role)
        ]

    def save(self, employee: Employee) -> None:
        with self._lock:
            current = self._by_id.get(employee.employee_id)
            stored_version = current.version if current else 0
            if employee.version != stored_version:
                raise ConcurrentUpdateError(f"Employee {employee.employee_id} was modified concurrently")
            self._by_id[employee.employee_id] = replace(employee, version=stored_version + 1)
