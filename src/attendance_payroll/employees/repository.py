from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def list_active(self, *, department: Optional[str] = None, role: Optional[str] = None) -> Sequence[Employee]:
        raise NotImplementedError

    def save(self, employee: Employee) -> None:
        """Persist the employee with its full attendance history, all or nothing.

        Raises ConcurrentUpdateError when the stored version is no longer
        ``employee.version``.
        """

        raise NotImplementedError
