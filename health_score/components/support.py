"""Support experience scoring component."""

import operator

import numpy as np
import pandas as pd

from .base import BaseScorer


class SupportScorer(BaseScorer):
    """
    Score based on resolution speed, satisfaction and ticket pressure.

    Satisfaction is linear, so this factor can be fractional
    (a 1.1 rating earns 0.75 points).

    Points:
    - Resolution time (0-30): <=4h 30, <=8h 25, <=24h 20, <=48h 15, <=72h 10
    - Satisfaction (0-30): (rating - 1) * 7.5
    - Escalations (0-25): 0 -> 25, 1-2 20, 3-4 10, >=5 0
    - Open tickets (0-15): 0-1 15, 2-4 10, 5-9 5, >=10 0
    """

    name = "support"

    @property
    def required_columns(self) -> list[str]:
        return [
            "AVERAGE_RESOLUTION_TIME",
            "SATISFACTION_SCORE",
            "ESCALATION_COUNT",
            "OPEN_TICKET_COUNT",
        ]

    def score(self, df: pd.DataFrame) -> pd.Series:
        """Calculate support score."""
        self.validate(df)

        resolution = self.banded(
            df["AVERAGE_RESOLUTION_TIME"], self.config.resolution_thresholds, operator.le
        )
        satisfaction = np.clip(
            (df["SATISFACTION_SCORE"].astype(float) - 1) * self.config.satisfaction_points_per_step,
            0,
            self.config.satisfaction_max_points,
        )
        escalations = self.banded(
            df["ESCALATION_COUNT"],
            self.config.escalation_thresholds,
            operator.ge,
            default=self.config.escalation_default,
        )
        tickets = self.banded(
            df["OPEN_TICKET_COUNT"],
            self.config.open_ticket_thresholds,
            operator.ge,
            default=self.config.open_ticket_default,
        )

        return pd.Series(
            np.clip(resolution + satisfaction.to_numpy() + escalations + tickets, 0, 100),
            index=df.index,
            dtype=float,
        )
