"""Type definitions for calculation pipeline."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def to_decimal(value: Any) -> Decimal:
    """Convert a numeric input to Decimal without binary float artefacts."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


class EmploymentType(str, Enum):
    """Employment classification, selects the PAYE method."""

    PRIMARY = "PRIMARY"
    SECONDARY = "SECONDARY"

    @classmethod
    def parse(cls, value: Any) -> EmploymentType:
        """Coerce a raw value to an employment type.

        Anything that is not a recognised variant falls back to PRIMARY so
        the calculator stays total over its inputs.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            logger.warning(
                "Unknown employment type %r, treating as %s", value, cls.PRIMARY.value
            )
            return cls.PRIMARY


class LineType(str, Enum):
    """Payslip line item types."""

    EARNING = "EARNING"
    DEDUCTION = "DEDUCTION"
    TAX = "TAX"
    EMPLOYER_TAX = "EMPLOYER_TAX"


@dataclass(frozen=True)
class Employee:
    """Read-only snapshot of the fields the calculator consumes."""

    id: str
    full_name: str
    basic_pay: Decimal
    house_allowance: Decimal = ZERO
    transport_allowance: Decimal = ZERO
    other_allowances: Decimal = ZERO
    employment_type: EmploymentType = EmploymentType.PRIMARY
    has_heslb_loan: bool = False
    remaining_heslb_balance: Decimal = ZERO

    def __post_init__(self) -> None:
        # Normalise representation only; values are never range-checked.
        for name in (
            "basic_pay",
            "house_allowance",
            "transport_allowance",
            "other_allowances",
            "remaining_heslb_balance",
        ):
            object.__setattr__(self, name, to_decimal(getattr(self, name)))
        object.__setattr__(
            self, "employment_type", EmploymentType.parse(self.employment_type)
        )


@dataclass(frozen=True)
class StatutoryRates:
    """
    Statutory contribution rates, immutable per payroll run.

    Attributes:
        nssf_rate_employee: Employee NSSF share of gross pay. Default 0.10.
        nssf_rate_employer: Employer NSSF share of gross pay. Default 0.10.
        sdl_rate: Skills Development Levy on gross pay. Default 0.035.
        wcf_rate: Workers Compensation Fund levy on gross pay. Default 0.005.
        heslb_rate: Share of basic pay applied to an active student loan.
            Default 0.15.

    Rates are applied verbatim; values outside [0, 1] are the caller's
    responsibility.
    """

    nssf_rate_employee: Decimal = Decimal("0.10")
    nssf_rate_employer: Decimal = Decimal("0.10")
    sdl_rate: Decimal = Decimal("0.035")
    wcf_rate: Decimal = Decimal("0.005")
    heslb_rate: Decimal = Decimal("0.15")

    def __post_init__(self) -> None:
        for name in (
            "nssf_rate_employee",
            "nssf_rate_employer",
            "sdl_rate",
            "wcf_rate",
            "heslb_rate",
        ):
            object.__setattr__(self, name, to_decimal(getattr(self, name)))

    @classmethod
    def default(cls) -> StatutoryRates:
        """Return the Mainland 2025 default rates."""
        return cls()

    def with_overrides(self, **changes: Any) -> StatutoryRates:
        """Return a new snapshot with some rates replaced."""
        return replace(self, **changes)

    def to_dict(self) -> dict[str, str]:
        """Return the rates as strings, keyed by field name."""
        return {
            "nssf_rate_employee": str(self.nssf_rate_employee),
            "nssf_rate_employer": str(self.nssf_rate_employer),
            "sdl_rate": str(self.sdl_rate),
            "wcf_rate": str(self.wcf_rate),
            "heslb_rate": str(self.heslb_rate),
        }


@dataclass(frozen=True)
class PayrollResult:
    """Computed payroll figures for one employee."""

    employee_id: str
    employee_name: str

    gross_pay: Decimal
    nssf_employee: Decimal
    taxable_income: Decimal
    paye: Decimal
    heslb_deduction: Decimal

    # Employer side (liabilities, not deducted from net)
    sdl: Decimal
    wcf: Decimal
    nssf_employer: Decimal

    net_pay: Decimal
    total_employer_cost: Decimal

    @property
    def total_deductions(self) -> Decimal:
        return self.nssf_employee + self.paye + self.heslb_deduction

    def to_canonical_dict(self) -> dict[str, Any]:
        """Return canonical dict for hashing (deterministic ordering)."""
        return {
            "employee_id": self.employee_id,
            "employee_name": self.employee_name,
            "gross_pay": str(self.gross_pay),
            "nssf_employee": str(self.nssf_employee),
            "taxable_income": str(self.taxable_income),
            "paye": str(self.paye),
            "heslb_deduction": str(self.heslb_deduction),
            "sdl": str(self.sdl),
            "wcf": str(self.wcf),
            "nssf_employer": str(self.nssf_employer),
            "net_pay": str(self.net_pay),
            "total_employer_cost": str(self.total_employer_cost),
        }


@dataclass(frozen=True)
class TaxBracket:
    """Tax bracket for progressive taxation.

    Income in (min_amount, max_amount] is taxed as
    flat_amount + (income - min_amount) * rate.
    """

    min_amount: Decimal
    max_amount: Decimal | None  # None = no upper limit
    rate: Decimal  # As decimal, e.g., 0.20 for 20%
    flat_amount: Decimal = ZERO  # Cumulative tax at min_amount

    def tax_for(self, income: Decimal) -> Decimal:
        return self.flat_amount + (income - self.min_amount) * self.rate


@dataclass(frozen=True)
class PayslipLine:
    """A signed payslip line derived from a payroll result."""

    line_type: LineType
    code: str
    amount: Decimal  # Final amount (signed per conventions)
    explanation: str | None = None
