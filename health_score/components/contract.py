"""Contract status scoring component."""

import operator

import numpy as np
import pandas as pd

from .base import BaseScorer


class ContractScorer(BaseScorer):
    """
    Score based on renewal runway, contract size and recent expansion.

    Renewal urgency is the only band table that reads "strictly greater
    than": a renewal exactly 0 days away counts as expired.

    Points:
    - Renewal urgency (0-40): >365 days 40, >180 35, >90 25, >30 15,
      >0 5, expired 0
    - Contract value (0-35): >=100k 35, >=50k 30, >=20k 25, >=5k 20,
      >0 10, 0 -> 0
    - Recent activity (15-25): upgrade 25, otherwise 15
    """

    name = "contract"

    @property
    def required_columns(self) -> list[str]:
        return ["DAYS_UNTIL_RENEWAL", "CONTRACT_VALUE", "RECENT_UPGRADES"]

    def score(self, df: pd.DataFrame) -> pd.Series:
        """Calculate contract score."""
        self.validate(df)
        value = df["CONTRACT_VALUE"]

        urgency = self.banded(
            df["DAYS_UNTIL_RENEWAL"], self.config.renewal_thresholds, operator.gt
        )
        value_points = self.banded(
            value, self.config.contract_value_thresholds, operator.ge
        )
        # Small contracts below the lowest band still count
        value_points = np.where(
            (value_points == 0) & (value > 0),
            self.config.contract_value_nonzero_points,
            value_points,
        )
        activity = np.where(
            df["RECENT_UPGRADES"].astype(bool),
            self.config.upgrade_points,
            self.config.stable_points,
        )

        return pd.Series(
            np.clip(urgency + value_points + activity, 0, 100),
            index=df.index,
            dtype=int,
        )
