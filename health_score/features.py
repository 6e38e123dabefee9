"""
Time-based derived features for health scoring.

Both features are whole days between the evaluation instant and a
timestamp column, floored, so a login 47 hours ago counts as 1 day.
"""

from datetime import datetime
from typing import Optional, Union

import numpy as np
import pandas as pd


ONE_DAY = pd.Timedelta(days=1)


def to_utc_timestamp(value: Optional[Union[datetime, pd.Timestamp, str]] = None) -> pd.Timestamp:
    """Normalize an evaluation instant to UTC; None means now."""
    if value is None:
        return pd.Timestamp.now(tz="UTC")
    timestamp = pd.Timestamp(value)
    if timestamp.tzinfo is None:
        return timestamp.tz_localize("UTC")
    return timestamp.tz_convert("UTC")


def days_since(values: pd.Series, now: pd.Timestamp) -> pd.Series:
    """Whole days elapsed from each timestamp to ``now`` (NaN where missing)."""
    parsed = pd.to_datetime(values, utc=True, format="ISO8601")
    return (now - parsed) // ONE_DAY


def derive_time_features(df: pd.DataFrame, now: pd.Timestamp) -> pd.DataFrame:
    """
    Add DAYS_SINCE_LAST_LOGIN and ACCOUNT_AGE_DAYS columns.

    Args:
        df: DataFrame with LAST_LOGIN_DATE and optionally CREATED_AT
        now: Evaluation instant (UTC)

    Returns:
        Copy of df with the derived columns added
    """
    df = df.copy()
    df["DAYS_SINCE_LAST_LOGIN"] = days_since(df["LAST_LOGIN_DATE"], now)

    if "CREATED_AT" in df.columns:
        df["ACCOUNT_AGE_DAYS"] = days_since(df["CREATED_AT"], now)
    else:
        df["ACCOUNT_AGE_DAYS"] = np.nan

    return df
