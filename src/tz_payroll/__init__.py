"""Tanzanian statutory payroll calculator."""

from tz_payroll.calculators import (
    Employee,
    EmploymentType,
    PayrollCalculator,
    PayrollResult,
    StatutoryRates,
    calculate_net_pay,
)

__version__ = "1.0.0"

__all__ = [
    "Employee",
    "EmploymentType",
    "PayrollCalculator",
    "PayrollResult",
    "StatutoryRates",
    "calculate_net_pay",
]
