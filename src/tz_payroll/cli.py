"""Payroll Command Line Interface.

Provides developer tools for:
- Calculating a single employee from flags
- Calculating a JSON roster
- Showing the effective statutory rates

Usage:
    python -m tz_payroll calculate --basic-pay 1000000 --headcount 5
    python -m tz_payroll run --input roster.json
    python -m tz_payroll rates
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from decimal import Decimal, InvalidOperation
from typing import Any, Callable

from pydantic import TypeAdapter, ValidationError

from tz_payroll.calculators.engine import PayrollCalculator
from tz_payroll.calculators.line_builder import LineItemBuilder
from tz_payroll.calculators.types import Employee, EmploymentType
from tz_payroll.config import ConfigurationError, get_settings
from tz_payroll.schemas import EmployeeRecord, PayrollResultResponse, RosterRequest

logger = logging.getLogger(__name__)


def parse_amount(s: str) -> Decimal:
    """Parse a TZS amount, allowing thousands separators."""
    try:
        return Decimal(s.replace(",", "").replace("_", ""))
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"not an amount: {s!r}")


class PayrollCli:
    """Payroll Command Line Interface."""

    def __init__(self) -> None:
        self.parser = self._build_parser()
        self.calculator = PayrollCalculator()

    def _build_parser(self) -> argparse.ArgumentParser:
        """Build argument parser."""
        parser = argparse.ArgumentParser(
            prog="python -m tz_payroll",
            description="Tanzanian statutory payroll calculator",
        )
        parser.add_argument(
            "-v",
            "--verbose",
            action="store_true",
            help="Enable debug logging",
        )
        subparsers = parser.add_subparsers(dest="command", help="Commands")

        # calculate command
        calculate = subparsers.add_parser(
            "calculate",
            help="Calculate payroll for a single employee",
        )
        calculate.add_argument("--id", default="emp_cli", help="Employee ID")
        calculate.add_argument("--name", default="", help="Employee full name")
        calculate.add_argument(
            "--basic-pay",
            type=parse_amount,
            required=True,
            help="Monthly basic pay (TZS)",
        )
        calculate.add_argument(
            "--house-allowance",
            type=parse_amount,
            default=Decimal("0"),
            help="Monthly house allowance (TZS)",
        )
        calculate.add_argument(
            "--transport-allowance",
            type=parse_amount,
            default=Decimal("0"),
            help="Monthly transport allowance (TZS)",
        )
        calculate.add_argument(
            "--other-allowances",
            type=parse_amount,
            default=Decimal("0"),
            help="Other monthly allowances (TZS)",
        )
        calculate.add_argument(
            "--secondary",
            action="store_true",
            help="Secondary employment (flat 30%% PAYE)",
        )
        calculate.add_argument(
            "--heslb-balance",
            type=parse_amount,
            help="Remaining HESLB balance; implies an active loan",
        )
        calculate.add_argument(
            "--headcount",
            type=int,
            required=True,
            help="Company headcount (SDL applies from 10)",
        )
        calculate.add_argument(
            "--json",
            action="store_true",
            help="Print the result as JSON",
        )

        # run command
        run = subparsers.add_parser(
            "run",
            help="Calculate a roster of employees from JSON",
        )
        run.add_argument(
            "--input",
            type=argparse.FileType("r", encoding="utf-8"),
            default="-",
            help="Roster JSON file, or - for stdin (default: -)",
        )
        run.add_argument(
            "--headcount",
            type=int,
            help="Company headcount (default: roster size)",
        )

        # rates command
        subparsers.add_parser(
            "rates",
            help="Show effective statutory rates",
        )

        return parser

    def run(self, args: list[str] | None = None) -> int:
        """Run the CLI with given arguments."""
        parsed = self.parser.parse_args(args)

        if not parsed.command:
            self.parser.print_help()
            return 1

        try:
            settings = get_settings()
        except ConfigurationError as e:
            print(f"Configuration error: {e}", file=sys.stderr)
            return 1

        logging.basicConfig(
            level=logging.DEBUG if parsed.verbose else settings.log_level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

        # Dispatch to command handler
        handlers: dict[str, Callable[..., int]] = {
            "calculate": self._cmd_calculate,
            "run": self._cmd_run,
            "rates": self._cmd_rates,
        }

        handler = handlers.get(parsed.command)
        if handler:
            return handler(parsed)

        print(f"Unknown command: {parsed.command}", file=sys.stderr)
        return 1

    def _cmd_calculate(self, args: argparse.Namespace) -> int:
        """Calculate and print one employee."""
        employee = Employee(
            id=args.id,
            full_name=args.name,
            basic_pay=args.basic_pay,
            house_allowance=args.house_allowance,
            transport_allowance=args.transport_allowance,
            other_allowances=args.other_allowances,
            employment_type=(
                EmploymentType.SECONDARY if args.secondary else EmploymentType.PRIMARY
            ),
            has_heslb_loan=args.heslb_balance is not None,
            remaining_heslb_balance=args.heslb_balance or Decimal("0"),
        )
        rates = get_settings().statutory_rates()
        result = self.calculator.calculate_net_pay(employee, args.headcount, rates)

        if args.json:
            self._print_json(PayrollResultResponse.from_result(result).model_dump(
                mode="json", by_alias=True
            ))
            return 0

        print(f"Payslip: {result.employee_name or result.employee_id}")
        for line in LineItemBuilder.build_payslip_lines(employee, result):
            print(
                f"  {line.line_type.value:<13} {line.code:<10}"
                f"{LineItemBuilder.format_amount(line.amount):>20}"
            )
        print(f"\n  Gross pay:           {LineItemBuilder.format_amount(result.gross_pay):>20}")
        print(f"  Taxable income:      {LineItemBuilder.format_amount(result.taxable_income):>20}")
        print(f"  Net pay:             {LineItemBuilder.format_amount(result.net_pay):>20}")
        print(f"  Total employer cost: {LineItemBuilder.format_amount(result.total_employer_cost):>20}")
        return 0

    def _cmd_run(self, args: argparse.Namespace) -> int:
        """Calculate every employee in a roster file."""
        with args.input as fh:
            try:
                payload = json.load(fh)
            except json.JSONDecodeError as e:
                print(f"Invalid roster JSON: {e}", file=sys.stderr)
                return 1

        try:
            roster = self._parse_roster(payload)
        except ValidationError as e:
            print(f"Invalid roster: {e}", file=sys.stderr)
            return 1

        headcount = args.headcount
        if headcount is None:
            headcount = roster.company_employee_count

        employees = [record.to_employee() for record in roster.employees]
        rates = get_settings().statutory_rates()
        results = self.calculator.calculate_batch(employees, rates, headcount)

        self._print_json([
            PayrollResultResponse.from_result(r).model_dump(mode="json", by_alias=True)
            for r in results
        ])
        return 0

    def _cmd_rates(self, args: argparse.Namespace) -> int:
        """Print effective statutory rates."""
        self._print_json(get_settings().statutory_rates().to_dict())
        return 0

    @staticmethod
    def _parse_roster(payload: Any) -> RosterRequest:
        """Accept a bare list of records or a {"employees": [...]} object."""
        if isinstance(payload, list):
            records = TypeAdapter(list[EmployeeRecord]).validate_python(payload)
            return RosterRequest(employees=records)
        return RosterRequest.model_validate(payload)

    @staticmethod
    def _print_json(data: Any) -> None:
        print(json.dumps(data, indent=2))


def main() -> int:
    """CLI entry point."""
    cli = PayrollCli()
    return cli.run()


if __name__ == "__main__":
    sys.exit(main())
