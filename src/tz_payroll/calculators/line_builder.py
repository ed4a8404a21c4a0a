"""Payslip line builder with deterministic result hashing."""

from __future__ import annotations

import hashlib
import json
from decimal import ROUND_HALF_UP, Decimal

from tz_payroll.calculators.types import (
    ZERO,
    Employee,
    LineType,
    PayrollResult,
    PayslipLine,
)


class LineItemBuilder:
    """Breaks a PayrollResult down into signed payslip lines.

    Sign conventions (non-negotiable):
    - EARNING: positive
    - DEDUCTION (employee): negative
    - TAX (employee): negative
    - EMPLOYER_TAX: positive (liability)

    Rounding:
    - Results carry full precision, never rounded mid-pipeline
    - Whole shillings only when formatting for display
    """

    DISPLAY_PRECISION = Decimal("1")  # TZS is displayed without minor units

    @staticmethod
    def round_to_shillings(amount: Decimal) -> Decimal:
        """Round amount to whole shillings for display."""
        return amount.quantize(LineItemBuilder.DISPLAY_PRECISION, rounding=ROUND_HALF_UP)

    @staticmethod
    def format_amount(amount: Decimal) -> str:
        """Format as the payslip shows it, e.g. 'TZS 1,117,000'."""
        return f"TZS {LineItemBuilder.round_to_shillings(amount):,}"

    @staticmethod
    def compute_result_fingerprint(result: PayrollResult) -> str:
        """Compute deterministic hash for a payroll result.

        Identical inputs produce identical results and therefore identical
        fingerprints.
        """
        canonical = result.to_canonical_dict()
        json_str = json.dumps(canonical, sort_keys=True)
        return hashlib.sha256(json_str.encode()).hexdigest()[:32]

    @staticmethod
    def build_payslip_lines(
        employee: Employee, result: PayrollResult
    ) -> list[PayslipLine]:
        """Build the payslip breakdown for one employee.

        Zero allowances and a zero HESLB deduction are omitted; statutory
        lines are always present.
        """
        lines = [
            LineItemBuilder._earning("BASIC", employee.basic_pay, "Basic pay"),
        ]
        for code, amount, explanation in (
            ("HOUSING", employee.house_allowance, "House allowance"),
            ("TRANSPORT", employee.transport_allowance, "Transport allowance"),
            ("OTHER", employee.other_allowances, "Other allowances"),
        ):
            if amount != 0:
                lines.append(LineItemBuilder._earning(code, amount, explanation))

        lines.append(
            LineItemBuilder._deduction("NSSF", result.nssf_employee, "NSSF (Employee)")
        )
        lines.append(
            PayslipLine(
                line_type=LineType.TAX,
                code="PAYE",
                amount=-result.paye,
                explanation="PAYE",
            )
        )
        if result.heslb_deduction != 0:
            lines.append(
                LineItemBuilder._deduction(
                    "HESLB", result.heslb_deduction, "HESLB loan repayment"
                )
            )

        lines.append(
            LineItemBuilder._employer_tax(
                "NSSF_ER", result.nssf_employer, "NSSF (Employer)"
            )
        )
        lines.append(
            LineItemBuilder._employer_tax("WCF", result.wcf, "Workers Compensation Fund")
        )
        lines.append(
            LineItemBuilder._employer_tax("SDL", result.sdl, "Skills Development Levy")
        )
        return lines

    @staticmethod
    def calculate_gross_from_lines(lines: list[PayslipLine]) -> Decimal:
        """GROSS = Σ(EARNING)"""
        gross = ZERO
        for line in lines:
            if line.line_type == LineType.EARNING:
                gross += line.amount
        return gross

    @staticmethod
    def calculate_net_from_lines(lines: list[PayslipLine]) -> Decimal:
        """Calculate net pay from line items.

        NET = Σ(EARNING) + Σ(DEDUCTION) + Σ(TAX)

        Note: EMPLOYER_TAX is excluded from net calculation (it's a liability).
        """
        net = ZERO
        for line in lines:
            if line.line_type != LineType.EMPLOYER_TAX:
                net += line.amount
        return net

    @staticmethod
    def calculate_employer_cost_from_lines(lines: list[PayslipLine]) -> Decimal:
        """EMPLOYER COST = Σ(EARNING) + Σ(EMPLOYER_TAX)"""
        cost = ZERO
        for line in lines:
            if line.line_type in (LineType.EARNING, LineType.EMPLOYER_TAX):
                cost += line.amount
        return cost

    @staticmethod
    def sum_by_type(lines: list[PayslipLine]) -> dict[LineType, Decimal]:
        """Sum line amounts by type."""
        totals: dict[LineType, Decimal] = {lt: ZERO for lt in LineType}
        for line in lines:
            totals[line.line_type] += line.amount
        return totals

    @staticmethod
    def _earning(code: str, amount: Decimal, explanation: str) -> PayslipLine:
        return PayslipLine(
            line_type=LineType.EARNING,
            code=code,
            amount=amount,
            explanation=explanation,
        )

    @staticmethod
    def _deduction(code: str, amount: Decimal, explanation: str) -> PayslipLine:
        return PayslipLine(
            line_type=LineType.DEDUCTION,
            code=code,
            amount=-amount,
            explanation=explanation,
        )

    @staticmethod
    def _employer_tax(code: str, amount: Decimal, explanation: str) -> PayslipLine:
        return PayslipLine(
            line_type=LineType.EMPLOYER_TAX,
            code=code,
            amount=amount,
            explanation=explanation,
        )
