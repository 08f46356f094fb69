"""Percentage-threshold categorical choice with a generic fallback."""

import math


def check_total(weights: dict) -> float:
    """Return the sum of *weights*; ValueError unless it is finite and at most 100."""
    total = sum(weights.values())
    if not math.isfinite(total) or total > 100:
        detail = ", ".join(f"{label}={pct:g}" for label, pct in weights.items())
        raise ValueError(f"percentages sum to {total:g} (must be at most 100): {detail}")
    return total


def cumulative_thresholds(weights: dict) -> list[tuple[str, float]]:
    """Turn ordered label->percent weights into (label, cumulative) pairs.

    Raises ValueError when the weights do not add up to a finite total of at
    most 100.
    """
    check_total(weights)
    pairs = []
    running = 0.0
    for label, pct in weights.items():
        running += pct
        pairs.append((label, running))
    return pairs


def roll_percent(rng) -> float:
    """Uniform draw from [0, 100)."""
    return rng.random() * 100


def weighted_choice(roll: float, thresholds, fallback):
    """Return the first label whose cumulative threshold is above *roll*.

    When the roll lands in the remaining mass, ``fallback()`` picks from the
    whole category instead.
    """
    for label, threshold in thresholds:
        if roll < threshold:
            return label
    return fallback()
