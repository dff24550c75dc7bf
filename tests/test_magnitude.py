import pytest

from scraper.magnitude import marker_color, marker_radius, severity_class


@pytest.mark.parametrize(
    "magnitude, expected",
    [
        (None, "unknown"),
        (1.2, "light"),
        (2.0, "moderate"),
        (3.0, "strong"),
        (4.9, "strong"),
        (5.0, "severe"),
    ],
)
def test_severity_class(magnitude, expected):
    assert severity_class(magnitude) == expected


@pytest.mark.parametrize(
    "magnitude, expected",
    [
        (None, "#22c55e"),
        (1.9, "#22c55e"),
        (2.0, "#eab308"),
        (2.5, "#f97316"),
        (3.0, "#ef4444"),
    ],
)
def test_marker_color(magnitude, expected):
    assert marker_color(magnitude) == expected


def test_marker_radius_has_a_floor():
    assert marker_radius(None) == 5
    assert marker_radius(1.0) == 5
    assert marker_radius(4.0) == 12.0
