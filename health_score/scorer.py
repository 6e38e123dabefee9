"""
Main HealthScorer class - orchestrates validation, factor scoring,
confidence, aggregation and recommendations.

Usage:
    from health_score import HealthScorer, CustomerHealthInput

    # Single customer
    scorer = HealthScorer()
    breakdown = scorer.calculate(CustomerHealthInput.from_dict(payload))
    print(breakdown.overall_score, breakdown.risk_level)

    # Batch
    result = scorer.score(df)
    print(result.df[["CUSTOMER_ID", "HEALTH_SCORE", "RISK_LEVEL"]])
    print(result.summary())
"""

from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import Optional, Union

import numpy as np
import pandas as pd
import pandera as pa

from .aggregation import build_factor_scores, weighted_overall
from .components import (
    ContractScorer,
    EngagementScorer,
    PaymentScorer,
    SupportScorer,
)
from .confidence import ConfidenceEstimator
from .config import DEFAULT_CONFIG, FACTOR_ORDER, RISK_LEVEL_ORDER, ScoringConfig
from .exceptions import CalculationError, HealthCalculatorError, ValidationError
from .features import derive_time_features, to_utc_timestamp
from .logging_config import get_logger
from .missing_data import assume_missing_values
from .models import CalculationOptions, CustomerHealthInput, HealthScoreBreakdown
from .recommendations import generate_recommendations
from .schemas import RAW_NUMBER_SCHEMA, SCORING_INPUT_SCHEMA, schema_error_details
from .validation import validate_health_input, validate_options

logger = get_logger(__name__)

Instant = Optional[Union[datetime, pd.Timestamp, str]]


@dataclass
class ScoringResult:
    """
    Container for batch scoring results with factor breakdown.

    Attributes:
        df: Input DataFrame with scores added
        factor_columns: List of factor score column names
    """

    df: pd.DataFrame
    factor_columns: list[str]

    def get_at_risk(self, min_level: str = "Warning") -> pd.DataFrame:
        """
        Get customers at or beyond a risk level.

        Args:
            min_level: Least severe level to include ("Healthy", "Warning", "Critical")

        Returns:
            DataFrame filtered to customers at or beyond the specified level
        """
        min_idx = RISK_LEVEL_ORDER.index(min_level)
        valid_levels = RISK_LEVEL_ORDER[min_idx:]
        return self.df[self.df["RISK_LEVEL"].isin(valid_levels)]

    def summary(self) -> pd.DataFrame:
        """
        Generate summary statistics by risk level.

        Returns:
            DataFrame with counts and average score/confidence
        """
        return (
            self.df.groupby("RISK_LEVEL")
            .agg(
                count=("HEALTH_SCORE", "count"),
                avg_score=("HEALTH_SCORE", "mean"),
                avg_confidence=("CONFIDENCE", "mean"),
            )
            .round(1)
        )

    def factor_breakdown(self) -> pd.DataFrame:
        """
        Show the spread of each factor score.

        Returns:
            DataFrame with factor statistics
        """
        stats = {}
        for col in self.factor_columns:
            factor_name = col.replace("_score", "")
            stats[factor_name] = {
                "mean": self.df[col].mean(),
                "max": self.df[col].max(),
                "min": self.df[col].min(),
            }
        return pd.DataFrame(stats).T.round(1)


def _as_number(value) -> Union[int, float]:
    value = float(value)
    return int(value) if value.is_integer() else value


class HealthScorer:
    """
    Customer health scoring engine.

    Calculates factor scores independently using pandas operations,
    then combines them with fixed weights into a 0-100 health score.
    Holds no state between calls beyond its configuration.

    Factors:
    - Payment (40%): recency, reliability, overdue balance
    - Engagement (30%): logins, feature breadth, active users, login recency
    - Contract (20%): renewal runway, contract value, recent upgrades
    - Support (10%): resolution time, satisfaction, escalations, open tickets
    """

    REQUIRED_COLUMNS = [
        "DAYS_SINCE_LAST_PAYMENT",
        "AVERAGE_PAYMENT_DELAY",
        "OVERDUE_AMOUNT",
        "LOGIN_FREQUENCY",
        "FEATURE_USAGE_COUNT",
        "ACTIVE_USER_COUNT",
        "LAST_LOGIN_DATE",
        "DAYS_UNTIL_RENEWAL",
        "CONTRACT_VALUE",
        "RECENT_UPGRADES",
        "AVERAGE_RESOLUTION_TIME",
        "SATISFACTION_SCORE",
        "ESCALATION_COUNT",
        "OPEN_TICKET_COUNT",
    ]

    def __init__(self, config: Optional[ScoringConfig] = None):
        """
        Initialize scorer with configuration.

        Args:
            config: ScoringConfig instance. Uses DEFAULT_CONFIG if None.
        """
        self.config = config or DEFAULT_CONFIG
        self._init_components()

    def _init_components(self) -> None:
        """Initialize all scoring components."""
        self.components = {
            "payment": PaymentScorer(self.config),
            "engagement": EngagementScorer(self.config),
            "contract": ContractScorer(self.config),
            "support": SupportScorer(self.config),
        }
        self.confidence = ConfidenceEstimator(self.config)

    def validate_input(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Validate a batch input frame.

        Args:
            df: Input DataFrame

        Returns:
            Validated DataFrame with numeric columns coerced to float

        Raises:
            ValidationError: If a required column is missing or a value
                fails its schema check, including a bool or string
                in a numeric column
        """
        missing = [col for col in self.REQUIRED_COLUMNS if col not in df.columns]
        if missing:
            raise ValidationError(missing[0], None, "required column")

        try:
            RAW_NUMBER_SCHEMA.validate(df)
            return SCORING_INPUT_SCHEMA.validate(df)
        except pa.errors.SchemaError as err:
            column, value, expected = schema_error_details(err)
            raise ValidationError(column, value, expected) from err

    def _score_frame(
        self, df: pd.DataFrame, options: CalculationOptions, now: pd.Timestamp
    ) -> tuple[pd.DataFrame, list[str]]:
        result = derive_time_features(df, now)

        # Factor scores are independent of each other
        factor_cols = []
        for name, component in self.components.items():
            col_name = f"{name}_score"
            result[col_name] = component.score(result)
            factor_cols.append(col_name)

        result["HEALTH_SCORE"] = weighted_overall(result)

        if options.include_confidence_scoring:
            result["CONFIDENCE"] = self.confidence.score(
                result, options.new_customer_threshold
            )
        else:
            result["CONFIDENCE"] = np.full(len(result), 100, dtype=int)

        result["RISK_LEVEL"] = (
            result["HEALTH_SCORE"].apply(self.config.get_risk_level).astype(str)
        )

        return result, factor_cols

    def calculate(
        self,
        data: CustomerHealthInput,
        options: Optional[CalculationOptions] = None,
        now: Instant = None,
    ) -> HealthScoreBreakdown:
        """
        Calculate the full health breakdown for one customer.

        Args:
            data: Customer signals
            options: CalculationOptions; defaults apply when None
            now: Evaluation instant; current UTC time when None

        Returns:
            HealthScoreBreakdown

        Raises:
            ValidationError: If the input or options are invalid
            CalculationError: On any other failure during scoring

        Example:
            >>> scorer = HealthScorer()
            >>> breakdown = scorer.calculate(customer, now="2024-06-01")
            >>> breakdown.risk_level
            'Healthy'
        """
        options = options or CalculationOptions()
        try:
            validate_options(options)
            validate_health_input(data)

            instant = to_utc_timestamp(now)
            frame = pd.DataFrame([data.to_record()])
            scored, factor_cols = self._score_frame(frame, options, instant)
            row = scored.iloc[0]

            scores = {name: _as_number(row[f"{name}_score"]) for name in FACTOR_ORDER}
            breakdown = HealthScoreBreakdown(
                overall_score=int(row["HEALTH_SCORE"]),
                confidence=int(row["CONFIDENCE"]),
                factors=MappingProxyType(build_factor_scores(scores)),
                risk_level=row["RISK_LEVEL"],
                recommendations=generate_recommendations(scores, self.config),
                assumed_values=MappingProxyType(
                    assume_missing_values(data, options.missing_data_strategy)
                ),
            )
        except HealthCalculatorError:
            raise
        except Exception as e:
            logger.warning("Health calculation failed for %s: %s", data.customer_id, e)
            raise CalculationError(f"Health calculation failed: {e}") from e

        logger.debug(
            "Scored customer %s: overall=%d risk=%s confidence=%d",
            data.customer_id,
            breakdown.overall_score,
            breakdown.risk_level,
            breakdown.confidence,
        )
        return breakdown

    def calculate_simple(
        self,
        data: CustomerHealthInput,
        options: Optional[CalculationOptions] = None,
        now: Instant = None,
    ) -> int:
        """Return only the overall health score."""
        return self.calculate(data, options, now).overall_score

    def score(
        self,
        df: pd.DataFrame,
        options: Optional[CalculationOptions] = None,
        now: Instant = None,
    ) -> ScoringResult:
        """
        Calculate health scores for all customers in a DataFrame.

        Args:
            df: DataFrame with the batch input columns
            options: CalculationOptions; defaults apply when None
            now: Evaluation instant; current UTC time when None

        Returns:
            ScoringResult with scores and factor breakdown

        Example:
            >>> scorer = HealthScorer()
            >>> result = scorer.score(customer_df)
            >>> at_risk = result.get_at_risk("Warning")
        """
        options = options or CalculationOptions()
        validate_options(options)
        validated = self.validate_input(df)

        try:
            result, factor_cols = self._score_frame(validated, options, to_utc_timestamp(now))
        except Exception as e:
            logger.warning("Batch health calculation failed: %s", e)
            raise CalculationError(f"Health calculation failed: {e}") from e

        logger.debug("Scored %d customers", len(result))
        return ScoringResult(df=result, factor_columns=factor_cols)


def calculate_health_score(
    data: CustomerHealthInput,
    options: Optional[CalculationOptions] = None,
    now: Instant = None,
) -> HealthScoreBreakdown:
    """Score one customer with the default configuration."""
    return HealthScorer().calculate(data, options, now)


def calculate_simple_health_score(
    data: CustomerHealthInput,
    options: Optional[CalculationOptions] = None,
    now: Instant = None,
) -> int:
    """Overall health score for one customer with the default configuration."""
    return HealthScorer().calculate_simple(data, options, now)


def generate_sample_data(
    n_customers: int = 100, seed: int = 42, now: Instant = None
) -> pd.DataFrame:
    """
    Generate realistic sample data for testing.

    Roughly three quarters of customers pay on time and log in weekly;
    the rest drift toward late payments, stale logins and open tickets.
    """
    np.random.seed(seed)
    instant = to_utc_timestamp(now)

    at_risk = np.random.random(n_customers) < 0.25

    days_since_payment = np.where(
        at_risk,
        np.random.randint(30, 150, size=n_customers),
        np.random.randint(0, 35, size=n_customers),
    )
    payment_delay = np.where(
        at_risk,
        np.random.randint(5, 45, size=n_customers),
        np.random.randint(-5, 8, size=n_customers),
    )
    overdue = np.where(
        at_risk,
        np.random.choice([0, 800, 3000, 7500, 15000], size=n_customers),
        np.random.choice([0, 0, 0, 500], size=n_customers),
    ).astype(float)

    logins = np.where(
        at_risk,
        np.random.randint(0, 6, size=n_customers),
        np.random.randint(5, 30, size=n_customers),
    )
    features = np.random.randint(0, 20, size=n_customers)
    users = np.random.randint(0, 40, size=n_customers)
    days_since_login = np.where(
        at_risk,
        np.random.randint(10, 150, size=n_customers),
        np.random.randint(0, 10, size=n_customers),
    )
    last_login = [
        (instant - pd.Timedelta(days=int(days))).isoformat() for days in days_since_login
    ]
    account_age = np.random.randint(10, 1500, size=n_customers)
    created_at = [
        (instant - pd.Timedelta(days=int(days))).isoformat() for days in account_age
    ]

    renewal = np.random.randint(-30, 500, size=n_customers)
    contract_value = np.random.choice(
        [0, 2500, 8000, 30000, 60000, 150000],
        size=n_customers,
        p=[0.05, 0.2, 0.3, 0.25, 0.12, 0.08],
    ).astype(float)
    upgrades = np.random.random(n_customers) < 0.2

    resolution = np.round(np.random.exponential(scale=20, size=n_customers), 1)
    satisfaction = np.round(
        np.clip(np.random.normal(loc=np.where(at_risk, 2.5, 4.0), scale=0.7), 1.0, 5.0), 1
    )
    escalations = np.where(
        at_risk,
        np.random.randint(0, 8, size=n_customers),
        np.random.randint(0, 2, size=n_customers),
    )
    open_tickets = np.random.poisson(lam=np.where(at_risk, 6, 1))

    # About a third of customers have each precomputed score
    reliability = np.where(
        np.random.random(n_customers) < 0.35,
        np.random.randint(0, 101, size=n_customers).astype(float),
        np.nan,
    )
    renewal_probability = np.where(
        np.random.random(n_customers) < 0.35,
        np.random.randint(0, 101, size=n_customers).astype(float),
        np.nan,
    )

    return pd.DataFrame(
        {
            "CUSTOMER_ID": [f"CUST_{i:04d}" for i in range(n_customers)],
            "DAYS_SINCE_LAST_PAYMENT": days_since_payment,
            "AVERAGE_PAYMENT_DELAY": payment_delay,
            "OVERDUE_AMOUNT": overdue,
            "PAYMENT_RELIABILITY_SCORE": reliability,
            "LOGIN_FREQUENCY": logins,
            "FEATURE_USAGE_COUNT": features,
            "ACTIVE_USER_COUNT": users,
            "LAST_LOGIN_DATE": last_login,
            "DAYS_UNTIL_RENEWAL": renewal,
            "CONTRACT_VALUE": contract_value,
            "RECENT_UPGRADES": upgrades,
            "RENEWAL_PROBABILITY": renewal_probability,
            "AVERAGE_RESOLUTION_TIME": resolution,
            "SATISFACTION_SCORE": satisfaction,
            "ESCALATION_COUNT": escalations,
            "OPEN_TICKET_COUNT": open_tickets,
            "CREATED_AT": created_at,
        }
    )
