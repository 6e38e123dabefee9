"""
Tests for single-record field validation.
"""

import math
from dataclasses import replace

import numpy as np
import pytest

from health_score.exceptions import HealthCalculatorError, ValidationError
from health_score.models import CalculationOptions, CustomerHealthInput
from health_score.validation import (
    validate_date_string,
    validate_health_input,
    validate_number,
    validate_options,
)

from conftest import build_customer


class TestValidateNumber:
    """Type and range checks for numeric fields."""

    @pytest.mark.parametrize("value", [0, 3, 2.5, np.int64(4), np.float64(1.5)])
    def test_accepts_numbers(self, value):
        assert validate_number(value, "field", 0) == value

    @pytest.mark.parametrize("value", ["abc", None, True, [1], math.nan])
    def test_rejects_non_numbers(self, value):
        with pytest.raises(ValidationError) as exc_info:
            validate_number(value, "paymentHistory.overdueAmount")

        assert exc_info.value.field == "paymentHistory.overdueAmount"
        assert exc_info.value.expected == "number"

    def test_message_names_field_value_and_constraint(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_number("abc", "paymentHistory.overdueAmount", 0)

        assert str(exc_info.value) == (
            "Invalid paymentHistory.overdueAmount: expected number, got str ('abc')"
        )

    def test_range_violations(self):
        with pytest.raises(ValidationError, match="expected number >= 0"):
            validate_number(-1, "field", 0)
        with pytest.raises(ValidationError, match="expected number <= 5"):
            validate_number(5.5, "field", 1, 5)

    def test_bounds_inclusive(self):
        assert validate_number(1, "field", 1, 5) == 1
        assert validate_number(5, "field", 1, 5) == 5


class TestValidateDateString:
    """ISO date parsing."""

    @pytest.mark.parametrize("value", [
        "2024-05-01",
        "2024-05-01T10:30:00Z",
        "2024-05-01T10:30:00.123+02:00",
    ])
    def test_accepts_iso_dates(self, value):
        assert validate_date_string(value, "engagementMetrics.lastLoginDate") == value

    @pytest.mark.parametrize("value", ["not-a-date", "", "2024-13-45", "now", "today", "NOW", "20240501"])
    def test_rejects_unparseable_strings(self, value):
        with pytest.raises(ValidationError, match="valid ISO date string"):
            validate_date_string(value, "engagementMetrics.lastLoginDate")

    @pytest.mark.parametrize("keyword", ["now", "today"])
    def test_wall_clock_keywords_rejected_in_record(self, keyword):
        """Relative keywords would pin the login to the real clock, not the evaluation instant."""
        customer = build_customer(engagement={"last_login_date": keyword})

        with pytest.raises(ValidationError) as exc_info:
            validate_health_input(customer)

        assert exc_info.value.field == "engagementMetrics.lastLoginDate"
        assert exc_info.value.value == keyword

    def test_rejects_non_strings(self):
        with pytest.raises(ValidationError, match="string \\(ISO date\\)"):
            validate_date_string(20240501, "engagementMetrics.lastLoginDate")


class TestValidateHealthInput:
    """Whole-record validation, fail-fast in group order."""

    def test_valid_customer_passes(self, healthy_customer):
        validate_health_input(healthy_customer)

    def test_negative_delay_allowed(self):
        """Negative average delay means the customer pays early."""
        validate_health_input(build_customer(payment={"average_payment_delay": -3}))

    def test_negative_renewal_allowed(self):
        """Expired contracts have negative days until renewal."""
        validate_health_input(build_customer(contract={"days_until_renewal": -20}))

    def test_optional_fields_may_be_absent(self):
        customer = build_customer(
            payment={"payment_reliability_score": None},
            contract={"renewal_probability": None},
            created_at=None,
        )
        validate_health_input(customer)

    @pytest.mark.parametrize("overrides,field", [
        ({"payment": {"days_since_last_payment": -1}}, "paymentHistory.daysSinceLastPayment"),
        ({"payment": {"overdue_amount": "abc"}}, "paymentHistory.overdueAmount"),
        ({"payment": {"payment_reliability_score": 101}}, "paymentHistory.paymentReliabilityScore"),
        ({"engagement": {"login_frequency": -2}}, "engagementMetrics.loginFrequency"),
        ({"engagement": {"active_user_count": None}}, "engagementMetrics.activeUserCount"),
        ({"engagement": {"last_login_date": "yesterday"}}, "engagementMetrics.lastLoginDate"),
        ({"contract": {"contract_value": -100}}, "contractInformation.contractValue"),
        ({"contract": {"recent_upgrades": "yes"}}, "contractInformation.recentUpgrades"),
        ({"contract": {"renewal_probability": -1}}, "contractInformation.renewalProbability"),
        ({"support": {"satisfaction_score": 0.9}}, "supportData.satisfactionScore"),
        ({"support": {"satisfaction_score": 5.1}}, "supportData.satisfactionScore"),
        ({"support": {"open_ticket_count": math.nan}}, "supportData.openTicketCount"),
        ({"created_at": "long ago"}, "createdAt"),
    ])
    def test_invalid_field_named(self, overrides, field):
        with pytest.raises(ValidationError) as exc_info:
            validate_health_input(build_customer(**overrides))

        assert exc_info.value.field == field

    def test_first_violation_reported(self):
        """Payment is checked before support."""
        customer = build_customer(
            payment={"overdue_amount": -5},
            support={"satisfaction_score": 9},
        )

        with pytest.raises(ValidationError) as exc_info:
            validate_health_input(customer)

        assert exc_info.value.field == "paymentHistory.overdueAmount"

    def test_wrong_group_type(self, healthy_customer):
        customer = replace(healthy_customer, support_data={"satisfactionScore": 4})

        with pytest.raises(ValidationError, match="supportData"):
            validate_health_input(customer)

    def test_non_record_rejected(self):
        with pytest.raises(ValidationError):
            validate_health_input({"paymentHistory": {}})

    def test_validation_error_is_calculator_error(self):
        assert issubclass(ValidationError, HealthCalculatorError)


class TestFromDict:
    """Building records from camelCase JSON payloads."""

    def test_round_trip_payload(self):
        payload = {
            "id": "42",
            "name": "Ada",
            "company": "Acme",
            "createdAt": "2023-01-01",
            "paymentHistory": {
                "daysSinceLastPayment": 5,
                "averagePaymentDelay": 0,
                "overdueAmount": 0,
            },
            "engagementMetrics": {
                "loginFrequency": 10,
                "featureUsageCount": 4,
                "activeUserCount": 3,
                "lastLoginDate": "2024-05-30",
            },
            "contractInformation": {
                "daysUntilRenewal": 100,
                "contractValue": 12000,
                "recentUpgrades": False,
                "renewalProbability": 70,
            },
            "supportData": {
                "averageResolutionTime": 12,
                "satisfactionScore": 4,
                "escalationCount": 0,
                "openTicketCount": 2,
            },
        }
        customer = CustomerHealthInput.from_dict(payload)

        assert customer.customer_id == "42"
        assert customer.company == "Acme"
        assert customer.payment_history.payment_reliability_score is None
        assert customer.contract_information.renewal_probability == 70
        assert customer.engagement_metrics.last_login_date == "2024-05-30"
        validate_health_input(customer)

    def test_missing_key_fails_validation(self):
        payload = {
            "paymentHistory": {"daysSinceLastPayment": 5, "averagePaymentDelay": 0},
            "engagementMetrics": {},
            "contractInformation": {},
            "supportData": {},
        }
        customer = CustomerHealthInput.from_dict(payload)

        with pytest.raises(ValidationError) as exc_info:
            validate_health_input(customer)

        assert exc_info.value.field == "paymentHistory.overdueAmount"
        assert exc_info.value.value is None

    def test_missing_group_rejected(self):
        with pytest.raises(ValidationError, match="paymentHistory"):
            CustomerHealthInput.from_dict({"engagementMetrics": {}})


class TestValidateOptions:

    def test_defaults_valid(self):
        validate_options(CalculationOptions())

    def test_unknown_strategy_rejected(self):
        with pytest.raises(ValidationError, match="missingDataStrategy"):
            validate_options(CalculationOptions(missing_data_strategy="reckless"))

    def test_negative_threshold_rejected(self):
        with pytest.raises(ValidationError, match="newCustomerThreshold"):
            validate_options(CalculationOptions(new_customer_threshold=-1))

    def test_callable_strategy_accepted(self):
        validate_options(CalculationOptions(missing_data_strategy=lambda field: 50.0))
