"""Bundled sample events served when every live source fails."""

from typing import List

from scraper.models import EarthquakeRecord

FALLBACK_DATE = "2023.05.01"

_SAMPLE_ROWS = [
    ("14:31:20", 38.3473, 38.9117, 7.0, None, 3.4, None, "SARIGUZEL-PUTURGE (MALATYA)", "İlksel"),
    ("13:58:02", 37.2185, 36.8802, 9.2, None, 2.8, None, "NURDAGI (GAZIANTEP)", "İlksel"),
    ("12:44:37", 38.1062, 37.2314, 5.1, None, 2.1, None, "GOKSUN (KAHRAMANMARAS)", "İlksel"),
    ("11:09:51", 39.1835, 28.1710, 6.8, None, 2.5, None, "SINDIRGI (BALIKESIR)", "İlksel"),
    ("09:27:14", 36.1024, 36.0147, 10.4, None, 3.1, 3.2, "DEFNE (HATAY)", "İlksel"),
    ("07:52:48", 40.8612, 29.1483, 11.6, None, 2.3, None, "MARMARA DENIZI", "İlksel"),
    ("05:16:03", 37.9078, 26.8392, 14.9, None, 2.6, None, "EGE DENIZI", "İlksel"),
    ("02:40:29", 38.8196, 40.5241, 8.3, None, 4.1, 4.0, "KARLIOVA (BINGOL)", "İlksel"),
]


def get_fallback_earthquakes() -> List[EarthquakeRecord]:
    """Return fresh copies of the sample events, each flagged is_fallback."""
    return [
        EarthquakeRecord(
            date=FALLBACK_DATE,
            time=time,
            latitude=latitude,
            longitude=longitude,
            depth=depth,
            magnitude_md=md,
            magnitude_ml=ml,
            magnitude_mw=mw,
            location=location,
            solution_quality=quality,
            is_fallback=True,
        )
        for time, latitude, longitude, depth, md, ml, mw, location, quality in _SAMPLE_ROWS
    ]
