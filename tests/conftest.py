"""Pytest fixtures for payroll calculator tests."""

from __future__ import annotations

from decimal import Decimal

import pytest

from tz_payroll.calculators.engine import PayrollCalculator
from tz_payroll.calculators.types import Employee, EmploymentType, StatutoryRates
from tz_payroll.config import get_settings

RATE_ENV_VARS = (
    "NSSF_RATE_EMPLOYEE",
    "NSSF_RATE_EMPLOYER",
    "SDL_RATE",
    "WCF_RATE",
    "HESLB_RATE",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Isolate each test from ambient rate overrides and cached settings."""
    for name in RATE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def calculator() -> PayrollCalculator:
    return PayrollCalculator()


@pytest.fixture
def default_rates() -> StatutoryRates:
    return StatutoryRates.default()


@pytest.fixture
def primary_employee() -> Employee:
    """Juma Shariff from the demo roster, without his loan."""
    return Employee(
        id="emp_1",
        full_name="Juma Shariff",
        basic_pay=Decimal("1000000"),
        house_allowance=Decimal("300000"),
        transport_allowance=Decimal("100000"),
        other_allowances=Decimal("100000"),
        employment_type=EmploymentType.PRIMARY,
        has_heslb_loan=False,
        remaining_heslb_balance=Decimal("0"),
    )


@pytest.fixture
def heslb_employee(primary_employee: Employee) -> Employee:
    return Employee(
        id=primary_employee.id,
        full_name=primary_employee.full_name,
        basic_pay=primary_employee.basic_pay,
        house_allowance=primary_employee.house_allowance,
        transport_allowance=primary_employee.transport_allowance,
        other_allowances=primary_employee.other_allowances,
        employment_type=EmploymentType.PRIMARY,
        has_heslb_loan=True,
        remaining_heslb_balance=Decimal("5000000"),
    )


@pytest.fixture
def roster_records() -> list[dict]:
    """Roster records as the employee screens store them."""
    return [
        {
            "id": "emp_1",
            "fullName": "Juma Shariff",
            "email": "juma.shariff@example.com",
            "nidaNumber": "19900101123456789012",
            "tinNumber": "123456789",
            "bankShortCode": "CRDB",
            "employmentType": "PRIMARY",
            "contractType": "PERMANENT",
            "basicPay": 1000000,
            "houseAllowance": 300000,
            "transportAllowance": 100000,
            "otherAllowances": 100000,
            "hasHeslbLoan": True,
            "remainingHeslbBalance": 5000000,
        },
        {
            "id": "emp_2",
            "fullName": "Zainab Mdoe",
            "employmentType": "PRIMARY",
            "basicPay": 2500000,
            "houseAllowance": 500000,
            "transportAllowance": 200000,
            "otherAllowances": 0,
            "hasHeslbLoan": False,
            "remainingHeslbBalance": 0,
        },
    ]
