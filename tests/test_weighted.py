"""Tests for the weighted categorical choice."""

import random

import pytest

from ingress_faker.weighted import (
    check_total,
    cumulative_thresholds,
    roll_percent,
    weighted_choice,
)


def _fallback():
    return "fallback"


class TestCumulativeThresholds:
    def test_running_sum_in_order(self):
        pairs = cumulative_thresholds({"GET": 50, "POST": 20, "PUT": 10})
        assert pairs == [("GET", 50), ("POST", 70), ("PUT", 80)]

    def test_over_100_raises(self):
        with pytest.raises(ValueError, match="sum to 120"):
            cumulative_thresholds({"GET": 70, "POST": 50})

    def test_error_message_names_labels_not_methods(self):
        with pytest.raises(ValueError) as exc:
            cumulative_thresholds({"ipv4": 80, "ipv6": 40})
        assert "ipv4=80" in str(exc.value)
        assert "HTTP" not in str(exc.value)

    @pytest.mark.parametrize("bad", [float("nan"), float("inf")])
    def test_non_finite_weight_raises(self, bad):
        with pytest.raises(ValueError):
            cumulative_thresholds({"GET": bad, "POST": 70, "PUT": 50})

    def test_check_total_returns_sum(self):
        assert check_total({"a": 30, "b": 70}) == 100

    def test_empty(self):
        assert cumulative_thresholds({}) == []


class TestWeightedChoice:
    THRESHOLDS = [("GET", 50), ("POST", 70)]

    def test_first_band(self):
        assert weighted_choice(0.0, self.THRESHOLDS, _fallback) == "GET"
        assert weighted_choice(49.99, self.THRESHOLDS, _fallback) == "GET"

    def test_second_band(self):
        assert weighted_choice(50.0, self.THRESHOLDS, _fallback) == "POST"
        assert weighted_choice(69.5, self.THRESHOLDS, _fallback) == "POST"

    def test_remaining_mass_uses_fallback(self):
        assert weighted_choice(70.0, self.THRESHOLDS, _fallback) == "fallback"
        assert weighted_choice(99.9, self.THRESHOLDS, _fallback) == "fallback"

    def test_zero_weight_never_chosen(self):
        thresholds = [("GET", 0), ("POST", 100)]
        assert weighted_choice(0.0, thresholds, _fallback) == "POST"

    def test_full_weight_always_chosen(self):
        rng = random.Random(7)
        for _ in range(1000):
            assert weighted_choice(roll_percent(rng), [("GET", 100)], _fallback) == "GET"

    def test_fallback_only_called_when_needed(self):
        calls = []

        def fallback():
            calls.append(1)
            return "x"

        weighted_choice(10.0, self.THRESHOLDS, fallback)
        assert calls == []
        weighted_choice(90.0, self.THRESHOLDS, fallback)
        assert calls == [1]


class TestRollPercent:
    def test_range(self):
        rng = random.Random(99)
        rolls = [roll_percent(rng) for _ in range(5000)]
        assert all(0 <= r < 100 for r in rolls)
        assert min(rolls) < 5
        assert max(rolls) > 95
