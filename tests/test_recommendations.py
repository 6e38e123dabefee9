"""
Tests for advisory messages and breakdown explanations.
"""

from types import MappingProxyType

import pytest

from health_score.aggregation import build_factor_scores, round_half_up
from health_score.models import HealthScoreBreakdown
from health_score.recommendations import (
    RECOMMENDATIONS,
    explain_breakdown,
    generate_recommendations,
)

from conftest import NOW


def scores(payment=100, engagement=100, contract=100, support=100):
    return {
        "payment": payment,
        "engagement": engagement,
        "contract": contract,
        "support": support,
    }


def breakdown_for(factor_scores, overall, risk_level="Warning"):
    return HealthScoreBreakdown(
        overall_score=overall,
        confidence=100,
        factors=MappingProxyType(build_factor_scores(factor_scores)),
        risk_level=risk_level,
    )


class TestGenerateRecommendations:
    """Threshold rules for the per-factor messages."""

    def test_strong_factors_get_nothing(self, default_config):
        assert generate_recommendations(scores(), default_config) == ()

    @pytest.mark.parametrize("score,kind", [
        (0, "severe"),
        (49, "severe"),
        (49.9, "severe"),
        (50, "monitor"),
        (69.5, "monitor"),
        (70, None),
    ])
    def test_thresholds(self, default_config, score, kind):
        severe, monitor = RECOMMENDATIONS["contract"]
        expected = {"severe": (severe,), "monitor": (monitor,), None: ()}[kind]

        assert generate_recommendations(scores(contract=score), default_config) == expected

    def test_factor_order(self, default_config):
        messages = generate_recommendations(
            scores(payment=60, engagement=10, contract=65, support=0), default_config
        )

        assert messages == (
            "Monitor payment patterns and implement automated reminders",
            "Schedule user onboarding session to increase platform adoption",
            "Identify expansion opportunities before renewal",
            "Review support escalations and improve resolution processes",
        )

    def test_at_most_one_message_per_factor(self, default_config):
        messages = generate_recommendations(scores(0, 0, 0, 0), default_config)

        assert len(messages) == 4
        assert len(set(messages)) == 4


class TestExplainBreakdown:
    """Plain-language summaries."""

    def test_healthy_explanation(self, scorer, healthy_customer):
        text = explain_breakdown(scorer.calculate(healthy_customer, now=NOW))

        assert text == (
            "Customer health score of 94/100 indicates excellent health with low churn risk. "
            "Primary strength: payment (100/100). "
            "Area for improvement: support (90/100)."
        )

    def test_critical_explanation(self, scorer, critical_customer):
        text = explain_breakdown(scorer.calculate(critical_customer, now=NOW))

        assert text.startswith("Customer health score of 6/100 indicates high churn risk")
        assert "Primary strength: contract (30/100)" in text
        # Payment and engagement both contribute 0; payment comes first
        assert "Area for improvement: payment (0/100)" in text

    def test_uses_contribution_not_raw_score(self):
        """Support 100 is worth 10 points, payment 40 is worth 16."""
        breakdown = breakdown_for(
            scores(payment=40, engagement=80, contract=60, support=100), overall=62
        )
        text = explain_breakdown(breakdown)

        assert "Primary strength: engagement (80/100)" in text
        assert "Area for improvement: support (100/100)" in text

    def test_fractional_score_formatting(self):
        breakdown = breakdown_for(scores(support=22.5), overall=98, risk_level="Healthy")

        assert "support (22.5/100)" in explain_breakdown(breakdown)

    def test_warning_description(self):
        text = explain_breakdown(breakdown_for(scores(50, 50, 50, 50), overall=50))

        assert "moderate concerns requiring attention" in text


class TestRoundHalfUp:

    @pytest.mark.parametrize("value,expected", [
        (0.5, 1),
        (1.5, 2),
        (2.5, 3),
        (2.4999, 2),
        (94.5, 95),
        (0.0, 0),
    ])
    def test_half_rounds_up(self, value, expected):
        assert round_half_up(value) == expected
