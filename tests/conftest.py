"""
Pytest fixtures for customer health scoring tests.
"""

import pandas as pd
import pytest

# Add package to path
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from health_score.config import ScoringConfig
from health_score.models import (
    ContractInformation,
    CustomerHealthInput,
    EngagementMetrics,
    PaymentHistory,
    SupportData,
)
from health_score.scorer import HealthScorer, generate_sample_data


# Fixed evaluation instant so day arithmetic is deterministic
NOW = pd.Timestamp("2024-06-01T12:00:00Z")


def days_ago(days: float) -> str:
    """ISO timestamp ``days`` days before NOW."""
    return (NOW - pd.Timedelta(days=days)).isoformat()


def build_customer(payment=None, engagement=None, contract=None, support=None, **metadata):
    """
    Build a healthy customer, overriding any group fields.

    Defaults score payment 100, engagement 90, contract 90, support 90.
    """
    payment_fields = {
        "days_since_last_payment": 10,
        "average_payment_delay": 0,
        "overdue_amount": 0,
        "payment_reliability_score": 95,
    }
    engagement_fields = {
        "login_frequency": 22,
        "feature_usage_count": 12,
        "active_user_count": 15,
        "last_login_date": days_ago(1),
    }
    contract_fields = {
        "days_until_renewal": 200,
        "contract_value": 60000,
        "recent_upgrades": True,
        "renewal_probability": 80,
    }
    support_fields = {
        "average_resolution_time": 6,
        "satisfaction_score": 5.0,
        "escalation_count": 1,
        "open_ticket_count": 1,
    }
    payment_fields.update(payment or {})
    engagement_fields.update(engagement or {})
    contract_fields.update(contract or {})
    support_fields.update(support or {})

    meta = {"created_at": days_ago(400), "customer_id": "CUST_TEST"}
    meta.update(metadata)

    return CustomerHealthInput(
        payment_history=PaymentHistory(**payment_fields),
        engagement_metrics=EngagementMetrics(**engagement_fields),
        contract_information=ContractInformation(**contract_fields),
        support_data=SupportData(**support_fields),
        **meta,
    )


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def default_config():
    """Default scoring configuration."""
    return ScoringConfig()


@pytest.fixture
def scorer(default_config):
    """HealthScorer with default config."""
    return HealthScorer(default_config)


@pytest.fixture
def healthy_customer():
    return build_customer()


@pytest.fixture
def critical_customer():
    """Large overdue balance, no usage, renewal in 10 days, unhappy support."""
    return build_customer(
        payment={"days_since_last_payment": 120, "average_payment_delay": 45, "overdue_amount": 25000},
        engagement={
            "login_frequency": 0,
            "feature_usage_count": 0,
            "active_user_count": 0,
            "last_login_date": days_ago(120),
        },
        contract={"days_until_renewal": 10, "contract_value": 1000, "recent_upgrades": False},
        support={
            "average_resolution_time": 96,
            "satisfaction_score": 1.1,
            "escalation_count": 15,
            "open_ticket_count": 12,
        },
    )


@pytest.fixture
def sample_data():
    """100 sample customers with realistic distributions."""
    return generate_sample_data(n_customers=100, seed=42, now=NOW)


@pytest.fixture
def single_customer_frame():
    """One healthy customer in the batch layout."""
    return pd.DataFrame([build_customer().to_record()])
