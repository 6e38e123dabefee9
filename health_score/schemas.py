"""
Data schema definitions for batch health scoring.

Uses Pandera for runtime validation of input DataFrames so that bad
rows are rejected before any scoring work begins. The constraints match
the single-record validator in ``health_score.validation``.
"""

import numbers

import numpy as np
import pandas as pd
import pandera as pa
from pandera import Column, Check, DataFrameSchema

from .validation import ISO_DATE_PATTERN


def _parses_as_iso_date(series: pd.Series) -> pd.Series:
    text = series.astype(str)
    parsed = pd.to_datetime(text, errors="coerce", utc=True, format="ISO8601")
    return text.str.match(ISO_DATE_PATTERN.pattern) & parsed.notna()


def _is_real_number(series: pd.Series) -> pd.Series:
    # Runs on the raw column, before numeric coercion turns True or "4.5" into floats
    if pd.api.types.is_bool_dtype(series):
        return pd.Series(False, index=series.index)
    if pd.api.types.is_numeric_dtype(series):
        return pd.Series(True, index=series.index)
    return series.map(
        lambda v: isinstance(v, numbers.Real) and not isinstance(v, (bool, np.bool_))
    ).astype(bool)


ISO_DATE_CHECK = Check(_parses_as_iso_date, error="valid ISO date string")


def _metric(*checks: Check, nullable: bool = False, required: bool = True, description: str = "") -> Column:
    return Column(
        float,
        nullable=nullable,
        required=required,
        coerce=True,
        checks=list(checks),
        description=description,
    )


# Schema for scoring input data
SCORING_INPUT_SCHEMA = DataFrameSchema(
    {
        "CUSTOMER_ID": Column(
            str,
            nullable=True,
            required=False,
            description="Customer identifier, carried through unscored"
        ),
        # Payment
        "DAYS_SINCE_LAST_PAYMENT": _metric(
            Check.greater_than_or_equal_to(0),
            description="Days since the last payment was received"
        ),
        "AVERAGE_PAYMENT_DELAY": _metric(
            description="Average payment delay in days (<= 0 means early)"
        ),
        "OVERDUE_AMOUNT": _metric(
            Check.greater_than_or_equal_to(0),
            description="Currently overdue amount"
        ),
        "PAYMENT_RELIABILITY_SCORE": _metric(
            Check.in_range(0, 100),
            nullable=True,
            required=False,
            description="Optional precomputed payment reliability (0-100)"
        ),
        # Engagement
        "LOGIN_FREQUENCY": _metric(
            Check.greater_than_or_equal_to(0),
            description="Logins per month"
        ),
        "FEATURE_USAGE_COUNT": _metric(
            Check.greater_than_or_equal_to(0),
            description="Distinct features used in the period"
        ),
        "ACTIVE_USER_COUNT": _metric(
            Check.greater_than_or_equal_to(0),
            description="Active users on the account"
        ),
        "LAST_LOGIN_DATE": Column(
            str,
            nullable=False,
            checks=ISO_DATE_CHECK,
            description="ISO-8601 timestamp of the last login"
        ),
        # Contract
        "DAYS_UNTIL_RENEWAL": _metric(
            description="Days until renewal (negative once expired)"
        ),
        "CONTRACT_VALUE": _metric(
            Check.greater_than_or_equal_to(0),
            description="Contract value"
        ),
        "RECENT_UPGRADES": Column(
            bool,
            nullable=False,
            description="Whether the account upgraded recently"
        ),
        "RENEWAL_PROBABILITY": _metric(
            Check.in_range(0, 100),
            nullable=True,
            required=False,
            description="Optional precomputed renewal probability (0-100)"
        ),
        # Support
        "AVERAGE_RESOLUTION_TIME": _metric(
            Check.greater_than_or_equal_to(0),
            description="Average ticket resolution time in hours"
        ),
        "SATISFACTION_SCORE": _metric(
            Check.in_range(1, 5),
            description="Satisfaction rating on a 1-5 scale"
        ),
        "ESCALATION_COUNT": _metric(
            Check.greater_than_or_equal_to(0),
            description="Escalated tickets in the period"
        ),
        "OPEN_TICKET_COUNT": _metric(
            Check.greater_than_or_equal_to(0),
            description="Currently open tickets"
        ),
        # Metadata
        "CREATED_AT": Column(
            str,
            nullable=True,
            required=False,
            checks=ISO_DATE_CHECK,
            description="Optional ISO-8601 account creation timestamp"
        ),
    },
    strict=False,  # Allow extra columns (names, companies, etc.)
    description="Schema for customer health scoring input data"
)


# Element types of the numeric columns, checked before SCORING_INPUT_SCHEMA coerces them
RAW_NUMBER_SCHEMA = DataFrameSchema(
    {
        name: Column(
            checks=Check(_is_real_number, error="number"),
            nullable=True,
            required=column.required,
        )
        for name, column in SCORING_INPUT_SCHEMA.columns.items()
        if column.coerce
    },
    strict=False,
    description="Numeric input columns must hold real numbers, not bools or strings"
)


# Schema for scoring output data
SCORING_OUTPUT_SCHEMA = DataFrameSchema(
    {
        "payment_score": Column(int, checks=Check.in_range(0, 100)),
        "engagement_score": Column(int, checks=Check.in_range(0, 100)),
        "contract_score": Column(int, checks=Check.in_range(0, 100)),
        "support_score": Column(float, checks=Check.in_range(0, 100)),
        "HEALTH_SCORE": Column(
            int,
            nullable=False,
            checks=Check.in_range(0, 100)
        ),
        "CONFIDENCE": Column(
            int,
            nullable=False,
            checks=Check.in_range(0, 100)
        ),
        "RISK_LEVEL": Column(
            str,
            nullable=False,
            checks=Check.isin(["Healthy", "Warning", "Critical"])
        ),
    },
    strict=False,  # Keep input columns alongside scores
    description="Schema for customer health scoring output data"
)


def schema_error_details(error: pa.errors.SchemaError) -> tuple:
    """Return (column, first failing value, expected) for a schema error."""
    column = getattr(error.schema, "name", None) or "dataframe"

    cases = error.failure_cases
    if isinstance(cases, pd.DataFrame) and "failure_case" in cases.columns and len(cases):
        value = cases["failure_case"].iloc[0]
    else:
        value = cases

    check = error.check
    expected = getattr(check, "error", None) or (str(check) if check is not None else "valid column")
    return column, value, expected
