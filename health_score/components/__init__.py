"""Factor scoring components for customer health."""

from .base import BaseScorer
from .payment import PaymentScorer
from .engagement import EngagementScorer
from .contract import ContractScorer
from .support import SupportScorer

__all__ = [
    "BaseScorer",
    "PaymentScorer",
    "EngagementScorer",
    "ContractScorer",
    "SupportScorer",
]
