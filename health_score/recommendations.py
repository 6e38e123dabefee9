"""Advisory messages and plain-language explanations for health scores."""

from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping, Tuple

from .config import FACTOR_ORDER

if TYPE_CHECKING:
    from .config import ScoringConfig
    from .models import HealthScoreBreakdown


# (severe, monitor) message per factor
RECOMMENDATIONS: Mapping[str, Tuple[str, str]] = MappingProxyType({
    "payment": (
        "Address payment delays and overdue amounts immediately",
        "Monitor payment patterns and implement automated reminders",
    ),
    "engagement": (
        "Schedule user onboarding session to increase platform adoption",
        "Provide feature training to improve engagement metrics",
    ),
    "contract": (
        "Initiate renewal conversation and value demonstration",
        "Identify expansion opportunities before renewal",
    ),
    "support": (
        "Review support escalations and improve resolution processes",
        "Focus on proactive support to improve satisfaction scores",
    ),
})

RISK_DESCRIPTIONS = MappingProxyType({
    "Healthy": "excellent health with low churn risk",
    "Warning": "moderate concerns requiring attention",
    "Critical": "high churn risk needing immediate intervention",
})


def generate_recommendations(
    factor_scores: Mapping[str, float], config: "ScoringConfig"
) -> Tuple[str, ...]:
    """
    One message per weak factor, in payment/engagement/contract/support order.

    Scores below ``config.severe_below`` get the severe message, scores
    below ``config.monitor_below`` the monitor message, others nothing.
    """
    messages = []
    for name in FACTOR_ORDER:
        severe, monitor = RECOMMENDATIONS[name]
        score = factor_scores[name]
        if score < config.severe_below:
            messages.append(severe)
        elif score < config.monitor_below:
            messages.append(monitor)
    return tuple(messages)


def explain_breakdown(breakdown: "HealthScoreBreakdown") -> str:
    """Summarize a breakdown in one or two sentences."""
    factors = breakdown.factors
    # max/min keep the first factor on ties, so payment wins over support
    strongest = max(factors, key=lambda name: factors[name].contribution)
    weakest = min(factors, key=lambda name: factors[name].contribution)
    description = RISK_DESCRIPTIONS.get(breakdown.risk_level, "an unclassified risk level")

    return (
        f"Customer health score of {breakdown.overall_score}/100 indicates {description}. "
        f"Primary strength: {strongest} ({factors[strongest].score:g}/100). "
        f"Area for improvement: {weakest} ({factors[weakest].score:g}/100)."
    )
