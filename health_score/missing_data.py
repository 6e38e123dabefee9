"""
Missing-data strategies for optional precomputed scores.

A strategy maps the name of an absent optional field to the value the
engine should assume for it, or None to assume nothing. Absent fields
still cost confidence whatever the strategy assumes.
"""

from types import MappingProxyType
from typing import Callable, Dict, Mapping, Optional

from .exceptions import ValidationError
from .models import CustomerHealthInput, MissingDataStrategy


OPTIONAL_SCORE_FIELDS = (
    "paymentHistory.paymentReliabilityScore",
    "contractInformation.renewalProbability",
)


def neutral(field: str) -> Optional[float]:
    """Assume nothing."""
    return None


def conservative(field: str) -> Optional[float]:
    """Assume the worst possible score."""
    return 0.0


def optimistic(field: str) -> Optional[float]:
    """Assume the best possible score."""
    return 100.0


MISSING_DATA_STRATEGIES: Mapping[str, Callable[[str], Optional[float]]] = MappingProxyType({
    "neutral": neutral,
    "conservative": conservative,
    "optimistic": optimistic,
})


def resolve_strategy(strategy: MissingDataStrategy) -> Callable[[str], Optional[float]]:
    """
    Look up a strategy by name, or accept a callable as-is.

    Raises:
        ValidationError: If the name is unknown
    """
    if callable(strategy):
        return strategy
    if isinstance(strategy, str) and strategy in MISSING_DATA_STRATEGIES:
        return MISSING_DATA_STRATEGIES[strategy]
    raise ValidationError(
        "options.missingDataStrategy",
        strategy,
        "one of neutral, conservative, optimistic or a callable",
    )


def assume_missing_values(
    data: CustomerHealthInput, strategy: MissingDataStrategy
) -> Dict[str, float]:
    """Return the assumed value for every absent optional field."""
    policy = resolve_strategy(strategy)
    present = {
        "paymentHistory.paymentReliabilityScore": data.payment_history.payment_reliability_score,
        "contractInformation.renewalProbability": data.contract_information.renewal_probability,
    }

    assumed = {}
    for field in OPTIONAL_SCORE_FIELDS:
        if present[field] is not None:
            continue
        value = policy(field)
        if value is not None:
            assumed[field] = float(value)
    return assumed
