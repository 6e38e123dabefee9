"""
Confidence estimation for health scores.

Confidence reflects how far the score can be trusted, not how healthy
the customer is. It starts at 100 and loses points for missing optional
scores, stale engagement data and short account history.
"""

from typing import TYPE_CHECKING, Optional

import numpy as np
import pandas as pd

if TYPE_CHECKING:
    from .config import ScoringConfig


def _is_missing(df: pd.DataFrame, column: str) -> pd.Series:
    if column not in df.columns:
        return pd.Series(True, index=df.index)
    return df[column].isna()


class ConfidenceEstimator:
    """
    Vectorized data-quality heuristic, independent of the factor scores.

    Penalties:
    - 5: no payment reliability score
    - 5: no renewal probability
    - 10: last login more than 30 days ago, 30 if more than 90
    - 25: account younger than the new-customer threshold
    """

    def __init__(self, config: "ScoringConfig"):
        self.config = config

    @property
    def required_columns(self) -> list[str]:
        return ["DAYS_SINCE_LAST_LOGIN", "ACCOUNT_AGE_DAYS"]

    def score(
        self, df: pd.DataFrame, new_customer_threshold: Optional[float] = 90
    ) -> pd.Series:
        """
        Calculate confidence for all rows.

        Args:
            df: DataFrame with derived time features
            new_customer_threshold: Minimum account age in days; 0 or None
                disables the new-customer penalty

        Returns:
            Series of integer confidence values in [0, 100]
        """
        missing = set(self.required_columns) - set(df.columns)
        if missing:
            raise ValueError(f"ConfidenceEstimator requires columns: {missing}")

        cfg = self.config
        days_since_login = df["DAYS_SINCE_LAST_LOGIN"]

        penalty = np.zeros(len(df), dtype=int)
        penalty += np.where(
            _is_missing(df, "PAYMENT_RELIABILITY_SCORE"), cfg.missing_reliability_penalty, 0
        )
        penalty += np.where(
            _is_missing(df, "RENEWAL_PROBABILITY"), cfg.missing_renewal_probability_penalty, 0
        )
        penalty += np.where(days_since_login > cfg.stale_login_days, cfg.stale_login_penalty, 0)
        penalty += np.where(
            days_since_login > cfg.inactive_login_days, cfg.inactive_login_penalty, 0
        )

        if new_customer_threshold:
            # Unknown creation date never counts as new
            penalty += np.where(
                df["ACCOUNT_AGE_DAYS"] < new_customer_threshold, cfg.new_customer_penalty, 0
            )

        return pd.Series(
            np.clip(100 - penalty, 0, 100),
            index=df.index,
            dtype=int,
        )
