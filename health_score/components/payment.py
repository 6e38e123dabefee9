"""Payment behavior scoring component."""

import operator

import numpy as np
import pandas as pd

from .base import BaseScorer


class PaymentScorer(BaseScorer):
    """
    Score based on payment recency, reliability and overdue balance.

    Payment is the strongest churn signal and carries 40% of the
    overall weight.

    Points:
    - Recency (0-40): <=30 days 40, <=60 30, <=90 20, else 0
    - Reliability (0-40): avg delay <=0 40, <=5 35, <=15 25, <=30 15, else 0
    - Overdue (0-20): 0 -> 20, <=1k 15, <=5k 10, <=10k 5, else 0
    """

    name = "payment"

    @property
    def required_columns(self) -> list[str]:
        return ["DAYS_SINCE_LAST_PAYMENT", "AVERAGE_PAYMENT_DELAY", "OVERDUE_AMOUNT"]

    def score(self, df: pd.DataFrame) -> pd.Series:
        """Calculate payment score."""
        self.validate(df)

        recency = self.banded(
            df["DAYS_SINCE_LAST_PAYMENT"], self.config.payment_recency_thresholds, operator.le
        )
        reliability = self.banded(
            df["AVERAGE_PAYMENT_DELAY"], self.config.payment_delay_thresholds, operator.le
        )
        overdue = self.banded(
            df["OVERDUE_AMOUNT"], self.config.overdue_thresholds, operator.le
        )

        return pd.Series(
            np.clip(recency + reliability + overdue, 0, 100),
            index=df.index,
            dtype=int,
        )
