from __future__ import annotations

from dataclasses import dataclass, fields, replace
from decimal import Decimal
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class PayrollRates:
    """Fixed allowance amounts and statutory percentages used by payroll."""

    transport_allowance: Decimal = Decimal("1000")
    meal_allowance: Decimal = Decimal("500")
    mobile_allowance: Decimal = Decimal("300")
    performance_allowance: Decimal = Decimal("2000")
    performance_min_attendance: int = 95
    pf_rate: Decimal = Decimal("0.12")
    esi_rate: Decimal = Decimal("0.0175")
    tax_rate: Decimal = Decimal("0")
    overtime_multiplier: Decimal = Decimal("1.5")
    days_per_month: int = 30

    @classmethod
    def from_mapping(cls, overrides: Optional[Mapping[str, Any]] = None) -> "PayrollRates":
        rates = cls()
        if not overrides:
            return rates
        known = {f.name: f.type for f in fields(cls)}
        changes = {}
        for key, value in overrides.items():
            if key not in known or value is None:
                continue
            changes[key] = int(value) if known[key] == "int" else Decimal(str(value))
        return replace(rates, **changes)
