"""Base class for factor scoring components."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable, List, Sequence, Tuple

import numpy as np
import pandas as pd

if TYPE_CHECKING:
    from ..config import ScoringConfig


class BaseScorer(ABC):
    """
    Abstract base class for factor scoring components.

    Each component maps one metric group to a 0-100 factor score
    using vectorized pandas operations over band tables.
    """

    name: str = "base"

    def __init__(self, config: "ScoringConfig"):
        """
        Initialize scorer with configuration.

        Args:
            config: ScoringConfig instance with band tables
        """
        self.config = config

    @abstractmethod
    def score(self, df: pd.DataFrame) -> pd.Series:
        """
        Calculate factor score for all rows.

        Must be implemented by subclasses using vectorized operations.

        Args:
            df: DataFrame with required columns

        Returns:
            Series of scores in [0, 100]
        """
        pass

    @property
    @abstractmethod
    def required_columns(self) -> list[str]:
        """List of columns required by this scorer."""
        pass

    def validate(self, df: pd.DataFrame) -> None:
        """Validate required columns exist."""
        missing = set(self.required_columns) - set(df.columns)
        if missing:
            raise ValueError(
                f"{self.__class__.__name__} requires columns: {missing}"
            )

    @staticmethod
    def banded(
        values: pd.Series,
        thresholds: Sequence[Tuple[float, int]],
        compare: Callable,
        default: int = 0,
    ) -> np.ndarray:
        """
        Award points from a band table (first match wins).

        Args:
            values: Metric values
            thresholds: (threshold, points) pairs, evaluated top-down
            compare: Comparison from the operator module, applied as
                compare(values, threshold)
            default: Points when no band matches
        """
        conditions: List[pd.Series] = []
        choices: List[int] = []

        for threshold, points in thresholds:
            conditions.append(compare(values, threshold))
            choices.append(points)

        return np.select(conditions, choices, default=default)
