"""Magnitude bands used by the table and map consumers (ML based)."""

from typing import Optional

# (lower bound, table class), checked top down
SEVERITY_BANDS = [
    (5.0, "severe"),
    (3.0, "strong"),
    (2.0, "moderate"),
]

MARKER_COLORS = [
    (3.0, "#ef4444"),  # red
    (2.5, "#f97316"),  # orange
    (2.0, "#eab308"),  # yellow
]
DEFAULT_MARKER_COLOR = "#22c55e"  # green

MIN_MARKER_RADIUS = 5


def severity_class(magnitude: Optional[float]) -> str:
    if magnitude is None:
        return "unknown"
    for lower, name in SEVERITY_BANDS:
        if magnitude >= lower:
            return name
    return "light"


def marker_color(magnitude: Optional[float]) -> str:
    magnitude = magnitude or 0.0
    for lower, color in MARKER_COLORS:
        if magnitude >= lower:
            return color
    return DEFAULT_MARKER_COLOR


def marker_radius(magnitude: Optional[float]) -> float:
    return max(MIN_MARKER_RADIUS, (magnitude or 0.0) * 3)


def describe(record) -> dict:
    """Record dict extended with the display hints for one event."""
    data = record.to_dict()
    data.update(
        {
            "severity": severity_class(record.magnitude_ml),
            "markerColor": marker_color(record.magnitude_ml),
            "markerRadius": marker_radius(record.magnitude_ml),
        }
    )
    return data
