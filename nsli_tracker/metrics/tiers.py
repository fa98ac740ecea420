"""
Tier Classification

Classifies NSLI ratios against the user's goals. The tiers partition the
ratio space: every ratio maps to exactly one of high, medium or low.
"""

from ..core.entities import Goals, Tier


def classify(ratio: float, goals: Goals = None) -> Tier:
    """
    Classify a ratio against the goals.

    The high threshold is checked first, so goals where medium exceeds
    high still yield a single tier.
    """
    goals = goals or Goals()

    if ratio >= goals.high:
        return Tier.HIGH
    elif ratio >= goals.medium:
        return Tier.MEDIUM
    return Tier.LOW


def gap_to_tier(ratio: float, tier: Tier, goals: Goals = None) -> float:
    """How far the ratio sits below a tier's lower edge (0 when reached)."""
    goals = goals or Goals()

    if tier == Tier.HIGH:
        threshold = goals.high
    elif tier == Tier.MEDIUM:
        threshold = goals.medium
    else:
        return 0.0
    return max(0.0, threshold - ratio)
