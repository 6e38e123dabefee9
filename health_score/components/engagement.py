"""Product engagement scoring component."""

import operator

import numpy as np
import pandas as pd

from .base import BaseScorer


class EngagementScorer(BaseScorer):
    """
    Score based on how much, how broadly and how recently the product is used.

    Login recency reads DAYS_SINCE_LAST_LOGIN, derived from the
    evaluation instant before scoring.

    Points:
    - Login frequency (0-30): >=20/month 30, >=10 25, >=5 20, >=1 10
    - Feature usage (0-25): >=15 25, >=10 20, >=5 15, >=1 10
    - Active users (0-25): >=20 25, >=10 20, >=5 15, >=1 10
    - Login recency (0-20): <=1 day 20, <=7 15, <=30 10, <=90 5
    """

    name = "engagement"

    @property
    def required_columns(self) -> list[str]:
        return [
            "LOGIN_FREQUENCY",
            "FEATURE_USAGE_COUNT",
            "ACTIVE_USER_COUNT",
            "DAYS_SINCE_LAST_LOGIN",
        ]

    def score(self, df: pd.DataFrame) -> pd.Series:
        """Calculate engagement score."""
        self.validate(df)

        logins = self.banded(
            df["LOGIN_FREQUENCY"], self.config.login_frequency_thresholds, operator.ge
        )
        features = self.banded(
            df["FEATURE_USAGE_COUNT"], self.config.feature_usage_thresholds, operator.ge
        )
        users = self.banded(
            df["ACTIVE_USER_COUNT"], self.config.active_user_thresholds, operator.ge
        )
        recency = self.banded(
            df["DAYS_SINCE_LAST_LOGIN"], self.config.login_recency_thresholds, operator.le
        )

        return pd.Series(
            np.clip(logins + features + users + recency, 0, 100),
            index=df.index,
            dtype=int,
        )
