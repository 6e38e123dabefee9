"""
Customer Health Scoring Package

A deterministic, rule-based system for scoring customer health from
payment, engagement, contract and support signals.
"""

from .config import DEFAULT_CONFIG, FACTOR_WEIGHTS, ScoringConfig
from .exceptions import CalculationError, HealthCalculatorError, ValidationError
from .models import (
    CalculationOptions,
    ContractInformation,
    CustomerHealthInput,
    EngagementMetrics,
    FactorScore,
    HealthScoreBreakdown,
    PaymentHistory,
    SupportData,
)
from .recommendations import explain_breakdown
from .scorer import (
    HealthScorer,
    ScoringResult,
    calculate_health_score,
    calculate_simple_health_score,
    generate_sample_data,
)

__all__ = [
    "HealthScorer",
    "ScoringResult",
    "ScoringConfig",
    "DEFAULT_CONFIG",
    "FACTOR_WEIGHTS",
    "CustomerHealthInput",
    "PaymentHistory",
    "EngagementMetrics",
    "ContractInformation",
    "SupportData",
    "CalculationOptions",
    "FactorScore",
    "HealthScoreBreakdown",
    "HealthCalculatorError",
    "ValidationError",
    "CalculationError",
    "calculate_health_score",
    "calculate_simple_health_score",
    "explain_breakdown",
    "generate_sample_data",
]
__version__ = "1.0.0"
