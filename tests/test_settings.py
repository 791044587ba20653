"""Tests for skill_insights.settings module."""

import os
from unittest.mock import patch

from skill_insights.settings import DEFAULT_THRESHOLDS, AnalyticsThresholds, load_thresholds


class TestDefaults:
    def test_default_values(self):
        assert DEFAULT_THRESHOLDS.strong_ratio == 0.75
        assert DEFAULT_THRESHOLDS.gap_coverage_percent == 50
        assert DEFAULT_THRESHOLDS.gap_average_rank == 2.5
        assert DEFAULT_THRESHOLDS.top_performer_limit == 5
        assert DEFAULT_THRESHOLDS.pool_client_name == "Talent Pool"


class TestLoadThresholds:
    @patch.dict(os.environ, {}, clear=True)
    def test_no_overrides(self):
        assert load_thresholds() == AnalyticsThresholds()

    @patch.dict(os.environ, {
        "SKILL_INSIGHTS_STRONG_RATIO": "0.8",
        "SKILL_INSIGHTS_GAP_AVERAGE_RANK": "3",
        "SKILL_INSIGHTS_TOP_PERFORMERS": "10",
    }, clear=True)
    def test_overrides_applied(self):
        th = load_thresholds()
        assert th.strong_ratio == 0.8
        assert th.gap_average_rank == 3.0
        assert th.top_performer_limit == 10
        assert th.gap_coverage_percent == 50

    @patch.dict(os.environ, {
        "SKILL_INSIGHTS_STRONG_RATIO": "1.5",
        "SKILL_INSIGHTS_GAP_COVERAGE_PERCENT": "abc",
        "SKILL_INSIGHTS_POOL_CLIENT_NAME": "Bench",
    }, clear=True)
    def test_invalid_overrides_ignored(self, caplog):
        th = load_thresholds()
        assert th.strong_ratio == 0.75
        assert th.gap_coverage_percent == 50
        assert th.pool_client_name == "Bench"
        assert "strong_ratio" in caplog.text
