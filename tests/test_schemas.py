"""Tests for roster record and result schemas."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from tz_payroll.calculators.engine import PayrollCalculator
from tz_payroll.calculators.types import EmploymentType
from tz_payroll.schemas import EmployeeRecord, PayrollResultResponse, RosterRequest


class TestEmployeeRecord:
    """Test parsing roster records."""

    def test_camel_case_record(self, roster_records):
        employee = EmployeeRecord.model_validate(roster_records[0]).to_employee()

        assert employee.id == "emp_1"
        assert employee.full_name == "Juma Shariff"
        assert employee.basic_pay == Decimal("1000000")
        assert employee.has_heslb_loan is True
        assert employee.remaining_heslb_balance == Decimal("5000000")
        assert employee.employment_type is EmploymentType.PRIMARY

    def test_snake_case_record(self):
        record = EmployeeRecord.model_validate(
            {"id": "emp_9", "full_name": "Neema", "basic_pay": "750000.50"}
        )
        assert record.basic_pay == Decimal("750000.50")
        assert record.house_allowance == Decimal("0")

    def test_unknown_employment_type_falls_back(self):
        record = EmployeeRecord.model_validate(
            {"id": "emp_9", "fullName": "Neema", "basicPay": 1, "employmentType": "CASUAL"}
        )
        assert record.to_employee().employment_type is EmploymentType.PRIMARY

    @pytest.mark.parametrize("raw", [None, 3, ["SECONDARY"]])
    def test_non_string_employment_type_falls_back(self, raw):
        record = EmployeeRecord.model_validate(
            {"id": "emp_9", "fullName": "Neema", "basicPay": 1, "employmentType": raw}
        )
        assert record.employment_type is EmploymentType.PRIMARY
        assert record.to_employee().employment_type is EmploymentType.PRIMARY

    def test_lowercase_employment_type_parsed(self):
        record = EmployeeRecord.model_validate(
            {"id": "emp_9", "fullName": "Neema", "basicPay": 1, "employmentType": "secondary"}
        )
        assert record.employment_type is EmploymentType.SECONDARY

    def test_missing_basic_pay_rejected(self):
        with pytest.raises(ValidationError):
            EmployeeRecord.model_validate({"id": "emp_9", "fullName": "Neema"})

    def test_roster_request(self, roster_records):
        roster = RosterRequest.model_validate(
            {"employees": roster_records, "companyEmployeeCount": 12}
        )
        assert len(roster.employees) == 2
        assert roster.company_employee_count == 12

    def test_roster_negative_headcount_rejected(self, roster_records):
        with pytest.raises(ValidationError):
            RosterRequest.model_validate(
                {"employees": roster_records, "companyEmployeeCount": -1}
            )


class TestPayrollResultResponse:
    """Test result serialisation."""

    def test_camel_case_dump(self, roster_records):
        employee = EmployeeRecord.model_validate(roster_records[0]).to_employee()
        result = PayrollCalculator().calculate_net_pay(employee, 2)

        data = PayrollResultResponse.from_result(result).model_dump(
            mode="json", by_alias=True
        )

        assert data["employeeId"] == "emp_1"
        assert data["employeeName"] == "Juma Shariff"
        assert Decimal(data["netPay"]) == Decimal("967000")
        assert Decimal(data["totalEmployerCost"]) == Decimal("1657500")
        assert "heslbDeduction" in data
