"""
Scoring configuration for the customer health model.

All band tables and risk thresholds are defined here for easy review.
Each band table is evaluated top-down and the first matching band wins.

Factor weights are not part of the tunable configuration: they are fixed
business weights and live in FACTOR_WEIGHTS.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Tuple


# Payment 40%, engagement 30%, contract 20%, support 10%
FACTOR_WEIGHTS = MappingProxyType({
    "payment": 0.4,
    "engagement": 0.3,
    "contract": 0.2,
    "support": 0.1,
})

FACTOR_ORDER = tuple(FACTOR_WEIGHTS)

HEALTHY = "Healthy"
WARNING = "Warning"
CRITICAL = "Critical"

# Severity order, least severe first
RISK_LEVEL_ORDER = (HEALTHY, WARNING, CRITICAL)


@dataclass
class ScoringConfig:
    """
    Configuration for all scoring components.

    Every factor score is 0-100 points:
    - Payment: recency 40 + reliability 40 + overdue 20
    - Engagement: logins 30 + features 25 + active users 25 + login recency 20
    - Contract: renewal urgency 40 + value 35 + recent activity 25
    - Support: resolution 30 + satisfaction 30 + escalations 25 + open tickets 15
    """

    # === Payment (0-100 points) ===
    # Days since last payment, upper bound inclusive
    payment_recency_thresholds: List[Tuple[float, int]] = field(default_factory=lambda: [
        (30, 40),
        (60, 30),
        (90, 20),
        # >90 days: 0 points
    ])
    # Average payment delay in days, <=0 means paid early
    payment_delay_thresholds: List[Tuple[float, int]] = field(default_factory=lambda: [
        (0, 40),
        (5, 35),
        (15, 25),
        (30, 15),
        # >30 days late: 0 points
    ])
    # Overdue amount in currency units, inverted
    overdue_thresholds: List[Tuple[float, int]] = field(default_factory=lambda: [
        (0, 20),
        (1000, 15),
        (5000, 10),
        (10000, 5),
        # >10k overdue: 0 points
    ])

    # === Engagement (0-100 points) ===
    # Lower bound inclusive
    login_frequency_thresholds: List[Tuple[float, int]] = field(default_factory=lambda: [
        (20, 30),  # daily
        (10, 25),
        (5, 20),   # weekly
        (1, 10),   # monthly
    ])
    feature_usage_thresholds: List[Tuple[float, int]] = field(default_factory=lambda: [
        (15, 25),
        (10, 20),
        (5, 15),
        (1, 10),
    ])
    active_user_thresholds: List[Tuple[float, int]] = field(default_factory=lambda: [
        (20, 25),
        (10, 20),
        (5, 15),
        (1, 10),
    ])
    # Whole days since last login, upper bound inclusive
    login_recency_thresholds: List[Tuple[float, int]] = field(default_factory=lambda: [
        (1, 20),
        (7, 15),
        (30, 10),
        (90, 5),
    ])

    # === Contract (0-100 points) ===
    # Days until renewal, strictly greater than
    renewal_thresholds: List[Tuple[float, int]] = field(default_factory=lambda: [
        (365, 40),
        (180, 35),
        (90, 25),
        (30, 15),
        (0, 5),
        # <=0: contract expired, 0 points
    ])
    # Contract value, lower bound inclusive
    contract_value_thresholds: List[Tuple[float, int]] = field(default_factory=lambda: [
        (100000, 35),
        (50000, 30),
        (20000, 25),
        (5000, 20),
    ])
    contract_value_nonzero_points: int = 10  # any value above zero
    upgrade_points: int = 25
    stable_points: int = 15  # no upgrade is stable, not bad

    # === Support (0-100 points) ===
    # Hours, upper bound inclusive
    resolution_thresholds: List[Tuple[float, int]] = field(default_factory=lambda: [
        (4, 30),
        (8, 25),
        (24, 20),
        (48, 15),
        (72, 10),
    ])
    satisfaction_points_per_step: float = 7.5  # 1-5 rating mapped onto 0-30
    satisfaction_max_points: float = 30.0
    # Lower bound inclusive, inverted
    escalation_thresholds: List[Tuple[float, int]] = field(default_factory=lambda: [
        (5, 0),
        (3, 10),
        (1, 20),
    ])
    escalation_default: int = 25
    open_ticket_thresholds: List[Tuple[float, int]] = field(default_factory=lambda: [
        (10, 0),
        (5, 5),
        (2, 10),
    ])
    open_ticket_default: int = 15

    # === Confidence penalties ===
    missing_reliability_penalty: int = 5
    missing_renewal_probability_penalty: int = 5
    stale_login_days: int = 30
    stale_login_penalty: int = 10
    inactive_login_days: int = 90
    inactive_login_penalty: int = 20  # on top of the stale penalty
    new_customer_penalty: int = 25

    # === Risk Level Categorization ===
    risk_levels: Dict[str, Tuple[int, int]] = field(default_factory=lambda: {
        HEALTHY: (71, 100),
        WARNING: (31, 70),
        CRITICAL: (0, 30),
    })

    # === Recommendations ===
    severe_below: int = 50
    monitor_below: int = 70

    # === Metadata ===
    max_score: int = 100
    version: str = "1.0.0"

    def get_risk_level(self, score: int) -> str:
        """Map numeric score to risk level."""
        for level, (low, high) in self.risk_levels.items():
            if low <= score <= high:
                return level
        return "Unknown"


# Default configuration instance
DEFAULT_CONFIG = ScoringConfig()
