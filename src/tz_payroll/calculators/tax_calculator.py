"""PAYE calculation for Mainland Tanzania."""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
from typing import assert_never

from tz_payroll.calculators.types import ZERO, EmploymentType, TaxBracket

# July 2025 Mainland bands, monthly taxable income in TZS.
MAINLAND_PAYE_BRACKETS: tuple[TaxBracket, ...] = (
    TaxBracket(
        min_amount=Decimal("0"),
        max_amount=Decimal("270000"),
        rate=Decimal("0"),
        flat_amount=Decimal("0"),
    ),
    TaxBracket(
        min_amount=Decimal("270000"),
        max_amount=Decimal("520000"),
        rate=Decimal("0.08"),
        flat_amount=Decimal("0"),
    ),
    TaxBracket(
        min_amount=Decimal("520000"),
        max_amount=Decimal("760000"),
        rate=Decimal("0.20"),
        flat_amount=Decimal("20000"),
    ),
    TaxBracket(
        min_amount=Decimal("760000"),
        max_amount=Decimal("1000000"),
        rate=Decimal("0.25"),
        flat_amount=Decimal("68000"),
    ),
    TaxBracket(
        min_amount=Decimal("1000000"),
        max_amount=None,
        rate=Decimal("0.30"),
        flat_amount=Decimal("128000"),
    ),
)

# Secondary employment is always taxed at the top marginal rate.
SECONDARY_EMPLOYMENT_RATE = Decimal("0.30")


class BracketTableError(ValueError):
    """Raised when a replacement bracket table is malformed."""

    def __init__(self, index: int, reason: str):
        self.index = index
        self.reason = reason
        super().__init__(f"Invalid tax bracket at position {index}: {reason}")


def validate_brackets(brackets: Sequence[TaxBracket]) -> None:
    """Check a bracket table is ordered, contiguous and continuous.

    Each band's flat_amount must equal the previous band's formula
    evaluated at that band's upper bound.

    Raises:
        BracketTableError: On the first offending bracket
    """
    if not brackets:
        raise BracketTableError(0, "table is empty")

    for i, bracket in enumerate(brackets):
        is_last = i == len(brackets) - 1
        if bracket.max_amount is None and not is_last:
            raise BracketTableError(i, "only the last bracket may be unbounded")
        if bracket.max_amount is not None and bracket.max_amount <= bracket.min_amount:
            raise BracketTableError(i, "upper bound must exceed lower bound")
        if i == 0:
            continue

        previous = brackets[i - 1]
        if bracket.min_amount != previous.max_amount:
            raise BracketTableError(
                i,
                f"lower bound {bracket.min_amount} does not meet previous "
                f"upper bound {previous.max_amount}",
            )
        expected = previous.tax_for(previous.max_amount)
        if bracket.flat_amount != expected:
            raise BracketTableError(
                i,
                f"flat amount {bracket.flat_amount} is discontinuous, expected {expected}",
            )


class TaxCalculator:
    """Calculates PAYE from taxable income.

    The bracket table is a policy constant owned by the calculator, not by
    StatutoryRates. A different tax year is supported by constructing the
    calculator with another table:

        TaxCalculator(brackets=[TaxBracket(...), ...])

    The selected band is the first whose inclusive upper bound holds the
    income; tax is that band's flat amount plus its rate on the excess.
    """

    def __init__(
        self,
        brackets: Sequence[TaxBracket] = MAINLAND_PAYE_BRACKETS,
        secondary_rate: Decimal = SECONDARY_EMPLOYMENT_RATE,
    ):
        if brackets is not MAINLAND_PAYE_BRACKETS:
            brackets = tuple(sorted(brackets, key=lambda b: b.min_amount))
            validate_brackets(brackets)
        self.brackets: tuple[TaxBracket, ...] = tuple(brackets)
        self.secondary_rate = secondary_rate

    def calculate_paye(
        self, taxable_income: Decimal, employment_type: EmploymentType
    ) -> Decimal:
        """Calculate PAYE for the given employment type.

        Every EmploymentType member needs its own case; callers coerce raw
        values with EmploymentType.parse first.
        """
        match employment_type:
            case EmploymentType.PRIMARY:
                return self.calculate_progressive_tax(taxable_income)
            case EmploymentType.SECONDARY:
                return self.calculate_flat_tax(taxable_income)
            case _:
                assert_never(employment_type)

    def calculate_flat_tax(self, taxable_income: Decimal) -> Decimal:
        """Flat secondary-employment tax, bypassing the bands entirely."""
        return taxable_income * self.secondary_rate

    def calculate_progressive_tax(self, taxable_income: Decimal) -> Decimal:
        """Calculate tax using progressive brackets."""
        if taxable_income <= 0:
            return ZERO

        for bracket in self.brackets:
            if bracket.max_amount is None or taxable_income <= bracket.max_amount:
                if taxable_income <= bracket.min_amount:
                    # Below the first band of a table that doesn't start at 0
                    return ZERO
                return bracket.tax_for(taxable_income)

        # Income above a table with no unbounded top band stays in the last band
        return self.brackets[-1].tax_for(taxable_income)
