"""Payroll calculation engine."""

from tz_payroll.calculators.engine import PayrollCalculator, calculate_net_pay
from tz_payroll.calculators.line_builder import LineItemBuilder
from tz_payroll.calculators.tax_calculator import (
    MAINLAND_PAYE_BRACKETS,
    BracketTableError,
    TaxCalculator,
)
from tz_payroll.calculators.types import (
    Employee,
    EmploymentType,
    PayrollResult,
    StatutoryRates,
)

__all__ = [
    "PayrollCalculator",
    "calculate_net_pay",
    "LineItemBuilder",
    "MAINLAND_PAYE_BRACKETS",
    "BracketTableError",
    "TaxCalculator",
    "Employee",
    "EmploymentType",
    "PayrollResult",
    "StatutoryRates",
]
