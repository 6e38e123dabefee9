"""
Field validation for single customer records.

Checks run in group order and stop at the first violation, which is
raised as a ValidationError naming the field, the value received and
the expected type or range.
"""

import math
import numbers
import re
from typing import Optional

import pandas as pd

from .exceptions import ValidationError
from .missing_data import resolve_strategy
from .models import (
    CalculationOptions,
    ContractInformation,
    CustomerHealthInput,
    EngagementMetrics,
    PaymentHistory,
    SupportData,
)


# Calendar date first; keeps pandas keywords such as "now" out of the parser
ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}")


def _is_number(value: object) -> bool:
    # bool is an int subclass but never a valid metric
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return not math.isnan(value)


def validate_number(
    value: object,
    field: str,
    minimum: Optional[float] = None,
    maximum: Optional[float] = None,
) -> float:
    """Validate a numeric value with optional inclusive bounds."""
    if not _is_number(value):
        raise ValidationError(field, value, "number")
    if minimum is not None and value < minimum:
        raise ValidationError(field, value, f"number >= {minimum}")
    if maximum is not None and value > maximum:
        raise ValidationError(field, value, f"number <= {maximum}")
    return value


def validate_optional_number(
    value: object,
    field: str,
    minimum: Optional[float] = None,
    maximum: Optional[float] = None,
) -> Optional[float]:
    if value is None:
        return None
    return validate_number(value, field, minimum, maximum)


def parse_timestamp(value: str) -> pd.Timestamp:
    """
    Parse an ISO-8601 string into a UTC timestamp.

    Naive values are read as UTC.

    Raises:
        ValueError: If the value does not parse
    """
    if not ISO_DATE_PATTERN.match(value):
        raise ValueError(f"Not an ISO-8601 date: {value!r}")
    timestamp = pd.to_datetime(value, utc=True, format="ISO8601")
    if pd.isna(timestamp):
        raise ValueError(f"Unparseable timestamp: {value!r}")
    return timestamp


def validate_date_string(value: object, field: str) -> str:
    """Validate that a value is a parseable ISO date string."""
    if not isinstance(value, str):
        raise ValidationError(field, value, "string (ISO date)")
    try:
        parse_timestamp(value)
    except (ValueError, OverflowError):
        raise ValidationError(field, value, "valid ISO date string") from None
    return value


def validate_health_input(data: CustomerHealthInput) -> None:
    """
    Validate a customer record before scoring.

    Raises:
        ValidationError: On the first field that fails its check
    """
    if not isinstance(data, CustomerHealthInput):
        raise ValidationError("customer", data, "CustomerHealthInput")

    payment = data.payment_history
    if not isinstance(payment, PaymentHistory):
        raise ValidationError("paymentHistory", payment, "PaymentHistory")
    validate_number(payment.days_since_last_payment, "paymentHistory.daysSinceLastPayment", 0)
    validate_number(payment.average_payment_delay, "paymentHistory.averagePaymentDelay")
    validate_number(payment.overdue_amount, "paymentHistory.overdueAmount", 0)
    validate_optional_number(
        payment.payment_reliability_score, "paymentHistory.paymentReliabilityScore", 0, 100
    )

    engagement = data.engagement_metrics
    if not isinstance(engagement, EngagementMetrics):
        raise ValidationError("engagementMetrics", engagement, "EngagementMetrics")
    validate_number(engagement.login_frequency, "engagementMetrics.loginFrequency", 0)
    validate_number(engagement.feature_usage_count, "engagementMetrics.featureUsageCount", 0)
    validate_number(engagement.active_user_count, "engagementMetrics.activeUserCount", 0)
    validate_date_string(engagement.last_login_date, "engagementMetrics.lastLoginDate")

    contract = data.contract_information
    if not isinstance(contract, ContractInformation):
        raise ValidationError("contractInformation", contract, "ContractInformation")
    validate_number(contract.days_until_renewal, "contractInformation.daysUntilRenewal")
    validate_number(contract.contract_value, "contractInformation.contractValue", 0)
    if not isinstance(contract.recent_upgrades, bool):
        raise ValidationError(
            "contractInformation.recentUpgrades", contract.recent_upgrades, "boolean"
        )
    validate_optional_number(
        contract.renewal_probability, "contractInformation.renewalProbability", 0, 100
    )

    support = data.support_data
    if not isinstance(support, SupportData):
        raise ValidationError("supportData", support, "SupportData")
    validate_number(support.average_resolution_time, "supportData.averageResolutionTime", 0)
    validate_number(support.satisfaction_score, "supportData.satisfactionScore", 1, 5)
    validate_number(support.escalation_count, "supportData.escalationCount", 0)
    validate_number(support.open_ticket_count, "supportData.openTicketCount", 0)

    if data.created_at is not None:
        validate_date_string(data.created_at, "createdAt")


def validate_options(options: CalculationOptions) -> None:
    """Validate calculation options before any scoring work."""
    if not isinstance(options.include_confidence_scoring, bool):
        raise ValidationError(
            "options.includeConfidenceScoring", options.include_confidence_scoring, "boolean"
        )
    validate_optional_number(
        options.new_customer_threshold, "options.newCustomerThreshold", 0
    )
    resolve_strategy(options.missing_data_strategy)
