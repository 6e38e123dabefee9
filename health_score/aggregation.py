"""
Weighted aggregation of factor scores.

Rounding is half-up (8.5 -> 9) everywhere, not Python's round-half-even.
"""

import math
from typing import Dict, Mapping

import numpy as np
import pandas as pd

from .config import FACTOR_WEIGHTS
from .models import FactorScore


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def weighted_overall(df: pd.DataFrame) -> pd.Series:
    """
    Combine ``<factor>_score`` columns into the overall 0-100 score.

    Args:
        df: DataFrame with one score column per factor

    Returns:
        Series of integer health scores
    """
    total = pd.Series(0.0, index=df.index)
    for name, weight in FACTOR_WEIGHTS.items():
        total = total + df[f"{name}_score"] * weight
    return pd.Series(np.floor(total + 0.5), index=df.index).astype(int)


def build_factor_scores(scores: Mapping[str, float]) -> Dict[str, FactorScore]:
    """Build per-factor records with their weighted contribution."""
    return {
        name: FactorScore(
            score=scores[name],
            weight=weight,
            contribution=round_half_up(scores[name] * weight),
        )
        for name, weight in FACTOR_WEIGHTS.items()
    }
