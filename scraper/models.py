from dataclasses import dataclass, field
from typing import Optional


def format_coordinate(value: float) -> str:
    """Shortest round-trip text for a coordinate, without a trailing '.0'."""
    # -0.0 + 0.0 is 0.0, so a negative zero renders as "0"
    text = repr(float(value) + 0.0)
    if text.endswith(".0"):
        text = text[:-2]
    return text


def make_record_id(date: str, time: str, latitude: float, longitude: float) -> str:
    """Build the event key, e.g. '2024.03.15_14:23:11_38.4521_27.1234'."""
    return f"{date}_{time}_{format_coordinate(latitude)}_{format_coordinate(longitude)}"


@dataclass(frozen=True)
class EarthquakeRecord:
    """
    One seismic event from the KOERI report.

    Date and time stay as the source text (YYYY.MM.DD / HH:MM:SS).
    Magnitudes are None where the report prints the '-.-' placeholder.
    """

    date: str
    time: str
    latitude: float
    longitude: float
    depth: float
    magnitude_md: Optional[float]
    magnitude_ml: Optional[float]
    magnitude_mw: Optional[float]
    location: str
    solution_quality: str
    is_fallback: bool = False
    id: str = field(init=False)

    def __post_init__(self):
        object.__setattr__(
            self,
            "id",
            make_record_id(self.date, self.time, self.latitude, self.longitude),
        )

    def to_dict(self):
        return {
            "date": self.date,
            "time": self.time,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "depth": self.depth,
            "magnitudeMD": self.magnitude_md,
            "magnitudeML": self.magnitude_ml,
            "magnitudeMw": self.magnitude_mw,
            "location": self.location,
            "solutionQuality": self.solution_quality,
            "id": self.id,
            "isFallback": self.is_fallback,
        }
