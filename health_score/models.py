"""
Input and output records for the health scoring engine.

Both are frozen dataclasses: they are built once per calculation and
never mutated afterwards. Input dataclasses do not check their fields;
that is the job of ``health_score.validation``.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Union

from .exceptions import ValidationError


@dataclass(frozen=True)
class PaymentHistory:
    days_since_last_payment: float
    average_payment_delay: float  # <= 0 means paid early
    overdue_amount: float
    payment_reliability_score: Optional[float] = None


@dataclass(frozen=True)
class EngagementMetrics:
    login_frequency: float  # logins per month
    feature_usage_count: float
    active_user_count: float
    last_login_date: str  # ISO-8601


@dataclass(frozen=True)
class ContractInformation:
    days_until_renewal: float  # negative once expired
    contract_value: float
    recent_upgrades: bool
    renewal_probability: Optional[float] = None


@dataclass(frozen=True)
class SupportData:
    average_resolution_time: float  # hours
    satisfaction_score: float  # 1-5 scale
    escalation_count: float
    open_ticket_count: float


def _group(payload: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = payload.get(key)
    if not isinstance(value, Mapping):
        raise ValidationError(key, value, "object")
    return value


@dataclass(frozen=True)
class CustomerHealthInput:
    """
    Raw customer signals grouped by factor.

    Identity fields (customer_id, name, company) are carried through
    for reporting and never scored.
    """

    payment_history: PaymentHistory
    engagement_metrics: EngagementMetrics
    contract_information: ContractInformation
    support_data: SupportData
    created_at: Optional[str] = None
    customer_id: Optional[str] = None
    name: Optional[str] = None
    company: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "CustomerHealthInput":
        """
        Build an input record from a camelCase JSON payload.

        Missing keys become None and are rejected later by validation.

        Raises:
            ValidationError: If the payload or one of its groups is not an object
        """
        if not isinstance(payload, Mapping):
            raise ValidationError("customer", payload, "object")

        payment = _group(payload, "paymentHistory")
        engagement = _group(payload, "engagementMetrics")
        contract = _group(payload, "contractInformation")
        support = _group(payload, "supportData")

        return cls(
            payment_history=PaymentHistory(
                days_since_last_payment=payment.get("daysSinceLastPayment"),
                average_payment_delay=payment.get("averagePaymentDelay"),
                overdue_amount=payment.get("overdueAmount"),
                payment_reliability_score=payment.get("paymentReliabilityScore"),
            ),
            engagement_metrics=EngagementMetrics(
                login_frequency=engagement.get("loginFrequency"),
                feature_usage_count=engagement.get("featureUsageCount"),
                active_user_count=engagement.get("activeUserCount"),
                last_login_date=engagement.get("lastLoginDate"),
            ),
            contract_information=ContractInformation(
                days_until_renewal=contract.get("daysUntilRenewal"),
                contract_value=contract.get("contractValue"),
                recent_upgrades=contract.get("recentUpgrades"),
                renewal_probability=contract.get("renewalProbability"),
            ),
            support_data=SupportData(
                average_resolution_time=support.get("averageResolutionTime"),
                satisfaction_score=support.get("satisfactionScore"),
                escalation_count=support.get("escalationCount"),
                open_ticket_count=support.get("openTicketCount"),
            ),
            created_at=payload.get("createdAt"),
            customer_id=payload.get("id"),
            name=payload.get("name"),
            company=payload.get("company"),
        )

    def to_record(self) -> Dict[str, Any]:
        """Flatten into one row of the batch scoring layout."""
        payment = self.payment_history
        engagement = self.engagement_metrics
        contract = self.contract_information
        support = self.support_data
        return {
            "CUSTOMER_ID": self.customer_id,
            "DAYS_SINCE_LAST_PAYMENT": payment.days_since_last_payment,
            "AVERAGE_PAYMENT_DELAY": payment.average_payment_delay,
            "OVERDUE_AMOUNT": payment.overdue_amount,
            "PAYMENT_RELIABILITY_SCORE": payment.payment_reliability_score,
            "LOGIN_FREQUENCY": engagement.login_frequency,
            "FEATURE_USAGE_COUNT": engagement.feature_usage_count,
            "ACTIVE_USER_COUNT": engagement.active_user_count,
            "LAST_LOGIN_DATE": engagement.last_login_date,
            "DAYS_UNTIL_RENEWAL": contract.days_until_renewal,
            "CONTRACT_VALUE": contract.contract_value,
            "RECENT_UPGRADES": contract.recent_upgrades,
            "RENEWAL_PROBABILITY": contract.renewal_probability,
            "AVERAGE_RESOLUTION_TIME": support.average_resolution_time,
            "SATISFACTION_SCORE": support.satisfaction_score,
            "ESCALATION_COUNT": support.escalation_count,
            "OPEN_TICKET_COUNT": support.open_ticket_count,
            "CREATED_AT": self.created_at,
        }


MissingDataStrategy = Union[str, Callable[[str], Optional[float]]]


@dataclass(frozen=True)
class CalculationOptions:
    """
    Per-call options for the engine.

    Attributes:
        include_confidence_scoring: If False, confidence is fixed at 100
        new_customer_threshold: Accounts younger than this many days lose
            confidence; 0 or None disables the check
        missing_data_strategy: "neutral", "conservative", "optimistic" or a
            callable mapping an optional field name to an assumed value
    """

    include_confidence_scoring: bool = True
    new_customer_threshold: Optional[float] = 90
    missing_data_strategy: MissingDataStrategy = "neutral"


@dataclass(frozen=True)
class FactorScore:
    score: float
    weight: float
    contribution: int

    def to_dict(self) -> Dict[str, float]:
        return {
            "score": self.score,
            "weight": self.weight,
            "contribution": self.contribution,
        }


@dataclass(frozen=True)
class HealthScoreBreakdown:
    """
    Complete scoring result for one customer.

    Attributes:
        overall_score: Weighted health score, 0-100
        confidence: Trust in the score, 0-100
        factors: FactorScore per factor, in payment/engagement/contract/support order
        risk_level: "Healthy", "Warning" or "Critical"
        recommendations: At most one advisory message per factor
        assumed_values: Values the missing-data strategy assumed for absent
            optional fields
    """

    overall_score: int
    confidence: int
    factors: Mapping[str, FactorScore]
    risk_level: str
    recommendations: Tuple[str, ...] = ()
    assumed_values: Mapping[str, float] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready camelCase mapping."""
        return {
            "overallScore": self.overall_score,
            "confidence": self.confidence,
            "factors": {
                name: factor.to_dict() for name, factor in self.factors.items()
            },
            "riskLevel": self.risk_level,
            "recommendations": list(self.recommendations),
            "assumedValues": dict(self.assumed_values),
        }
