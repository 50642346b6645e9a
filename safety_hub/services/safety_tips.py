"""Rotating safety tips shown on the user dashboard."""

from typing import Tuple

SAFETY_TIPS: Tuple[str, ...] = (
    "Use well-lit and populated routes when traveling.",
    "Share your location with trusted contacts.",
    "Keep emergency contacts readily available.",
    "Trust your instincts if something feels wrong.",
    "Stay alert and avoid distractions while walking alone.",
)


def tip_at(index: int) -> str:
    return SAFETY_TIPS[index % len(SAFETY_TIPS)]


def next_index(index: int) -> int:
    return (index + 1) % len(SAFETY_TIPS)


def prev_index(index: int) -> int:
    return (index - 1 + len(SAFETY_TIPS)) % len(SAFETY_TIPS)
