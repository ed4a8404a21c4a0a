"""Payroll calculation engine - main orchestrator."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from decimal import Decimal

from tz_payroll.calculators.tax_calculator import TaxCalculator
from tz_payroll.calculators.types import (
    ZERO,
    Employee,
    PayrollResult,
    StatutoryRates,
)

logger = logging.getLogger(__name__)

# Skills Development Levy applies from this headcount upwards.
SDL_HEADCOUNT_THRESHOLD = 10


class PayrollCalculator:
    """Statutory payroll calculator for one employee at a time.

    Calculation pipeline (stable order per employee):
    1) Gross pay = basic pay + all allowances
    2) NSSF employee contribution (first charge, before tax)
    3) PAYE on taxable income (gross - NSSF)
    4) HESLB loan repayment on basic pay, capped at the remaining balance
    5) Employer contributions: NSSF employer, WCF, SDL (headcount gated)
    6) Net pay and total employer cost

    The calculator holds no mutable state and never raises for numeric
    input; invalid figures compute arithmetically. Validation belongs to
    whoever builds the Employee.
    """

    def __init__(self, tax_calculator: TaxCalculator | None = None):
        self.tax_calculator = tax_calculator or TaxCalculator()

    def calculate_net_pay(
        self,
        employee: Employee,
        company_employee_count: int,
        rates: StatutoryRates | None = None,
    ) -> PayrollResult:
        """Calculate payroll figures for a single employee.

        Args:
            employee: The employee snapshot to calculate
            company_employee_count: Organisation headcount, gates SDL
            rates: Rates snapshot for this run; defaults are materialised
                per call when omitted

        Returns:
            A fresh PayrollResult
        """
        if rates is None:
            rates = StatutoryRates.default()

        # 1) Gross
        gross_pay = self._calculate_gross(employee)

        # 2) NSSF before tax
        nssf_employee = gross_pay * rates.nssf_rate_employee
        taxable_income = gross_pay - nssf_employee

        # 3) PAYE
        paye = self.tax_calculator.calculate_paye(
            taxable_income, employee.employment_type
        )

        # 4) HESLB
        heslb_deduction = self._calculate_heslb(employee, rates)

        # 5) Employer contributions
        nssf_employer = gross_pay * rates.nssf_rate_employer
        wcf = gross_pay * rates.wcf_rate
        sdl = self._calculate_sdl(gross_pay, company_employee_count, rates)

        # 6) Net and employer cost
        net_pay = gross_pay - nssf_employee - paye - heslb_deduction
        total_employer_cost = gross_pay + sdl + wcf + nssf_employer

        logger.debug(
            "Calculated payroll for %s: gross=%s paye=%s net=%s employer_cost=%s",
            employee.id,
            gross_pay,
            paye,
            net_pay,
            total_employer_cost,
        )

        return PayrollResult(
            employee_id=employee.id,
            employee_name=employee.full_name,
            gross_pay=gross_pay,
            nssf_employee=nssf_employee,
            taxable_income=taxable_income,
            paye=paye,
            heslb_deduction=heslb_deduction,
            sdl=sdl,
            wcf=wcf,
            nssf_employer=nssf_employer,
            net_pay=net_pay,
            total_employer_cost=total_employer_cost,
        )

    def calculate_batch(
        self,
        employees: Sequence[Employee],
        rates: StatutoryRates | None = None,
        company_employee_count: int | None = None,
    ) -> list[PayrollResult]:
        """Calculate every employee of a roster against one rates snapshot.

        Headcount defaults to the roster size. Results keep input order.
        """
        if rates is None:
            rates = StatutoryRates.default()
        if company_employee_count is None:
            company_employee_count = len(employees)

        logger.info(
            "Calculating payroll for %d employees (headcount=%d)",
            len(employees),
            company_employee_count,
        )
        return [
            self.calculate_net_pay(employee, company_employee_count, rates)
            for employee in employees
        ]

    @staticmethod
    def _calculate_gross(employee: Employee) -> Decimal:
        return (
            employee.basic_pay
            + employee.house_allowance
            + employee.transport_allowance
            + employee.other_allowances
        )

    @staticmethod
    def _calculate_heslb(employee: Employee, rates: StatutoryRates) -> Decimal:
        """Loan repayment is a share of basic pay, not gross."""
        if not employee.has_heslb_loan:
            return ZERO
        calculated = employee.basic_pay * rates.heslb_rate
        return min(calculated, employee.remaining_heslb_balance)

    @staticmethod
    def _calculate_sdl(
        gross_pay: Decimal, company_employee_count: int, rates: StatutoryRates
    ) -> Decimal:
        if company_employee_count >= SDL_HEADCOUNT_THRESHOLD:
            return gross_pay * rates.sdl_rate
        return ZERO


def calculate_net_pay(
    employee: Employee,
    company_employee_count: int,
    rates: StatutoryRates | None = None,
) -> PayrollResult:
    """Module-level shortcut using the default tax table."""
    return PayrollCalculator().calculate_net_pay(employee, company_employee_count, rates)
