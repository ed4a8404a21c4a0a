"""Pydantic schemas for roster records and calculated results."""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from tz_payroll.calculators.types import Employee, EmploymentType, PayrollResult


# ============================================================================
# Roster input
# ============================================================================


class EmployeeRecord(BaseModel):
    """An employee record as the roster stores it.

    Keys may be camelCase (``basicPay``) or snake_case (``basic_pay``).
    Identity and banking fields the calculator does not consume (NIDA, TIN,
    bank account, ...) are ignored.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    id: str
    full_name: str
    basic_pay: Decimal
    house_allowance: Decimal = Decimal("0")
    transport_allowance: Decimal = Decimal("0")
    other_allowances: Decimal = Decimal("0")
    employment_type: EmploymentType = EmploymentType.PRIMARY
    has_heslb_loan: bool = False
    remaining_heslb_balance: Decimal = Decimal("0")

    @field_validator("employment_type", mode="before")
    @classmethod
    def parse_employment_type(cls, value: Any) -> EmploymentType:
        """Unrecognised values, including null, fall back to PRIMARY."""
        return EmploymentType.parse(value)

    def to_employee(self) -> Employee:
        return Employee(
            id=self.id,
            full_name=self.full_name,
            basic_pay=self.basic_pay,
            house_allowance=self.house_allowance,
            transport_allowance=self.transport_allowance,
            other_allowances=self.other_allowances,
            employment_type=self.employment_type,
            has_heslb_loan=self.has_heslb_loan,
            remaining_heslb_balance=self.remaining_heslb_balance,
        )


class RosterRequest(BaseModel):
    """A roster to calculate in one run."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    employees: list[EmployeeRecord]
    company_employee_count: int | None = Field(default=None, ge=0)


# ============================================================================
# Result output
# ============================================================================


class PayrollResultResponse(BaseModel):
    """Schema for a calculated payroll result."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    employee_id: str
    employee_name: str
    gross_pay: Decimal
    nssf_employee: Decimal
    taxable_income: Decimal
    paye: Decimal
    heslb_deduction: Decimal
    sdl: Decimal
    wcf: Decimal
    nssf_employer: Decimal
    net_pay: Decimal
    total_employer_cost: Decimal

    @classmethod
    def from_result(cls, result: PayrollResult) -> "PayrollResultResponse":
        return cls.model_validate(result)
