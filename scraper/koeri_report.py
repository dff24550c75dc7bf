"""
KOERI (Kandilli Observatory) recent earthquake report parser.

The lst pages publish the last few hundred events as a fixed-width text
table meant for people, not machines:

    Tarih      Saat      Enlem(N)  Boylam(E) Derinlik(km)  MD   ML   Mw    Yer                                             Çözüm Niteliği
    ---------- --------  --------  -------   ----------    ------------    --------------                                  --------------
    2024.03.15 14:23:11  38.4521   27.1234        7.3      -.-  3.2  -.-   SOME PLACE NAME                                   İlksel

This module locates those lines inside whatever wraps them (HTML page,
banner text, bare text) and turns each one into an EarthquakeRecord.
Nothing here touches the network.
"""

import re
from typing import List, Optional

from bs4 import BeautifulSoup

from scraper.log_setup import setup_logger
from scraper.models import EarthquakeRecord

DATE_PATTERN = re.compile(r"\d{4}\.\d{2}\.\d{2}")
DATA_LINE_PATTERN = re.compile(r"^\d{4}\.\d{2}\.\d{2}\s+\d{2}:\d{2}:\d{2}")
SEPARATOR_PATTERN = re.compile(r"^[ \t-]*-{3,}[ \t-]*$", re.MULTILINE)
NUMBER_PATTERN = re.compile(r"^[+-]?\d+(\.\d+)?$", re.ASCII)

# Placeholder KOERI prints for a magnitude it did not compute
NO_DATA = "-.-"

# date, time, lat, lon, depth, MD, ML, Mw, >=1 location token, quality
MIN_TOKENS = 10

REVISION_PREFIX = "REVIZE"

COLUMN_HEADER = (
    "Tarih      Saat      Enlem(N)  Boylam(E) Derinlik(km)  MD   ML   Mw    Yer"
)
ALTERNATE_HEADERS = [
    "Tarih",
    "Date",
    "TURKIYE VE YAKIN CEVRESINDEKI SON DEPREMLER",
    "TÜRKİYE VE YAKIN ÇEVRESİNDEKİ SON DEPREMLER",
]


def is_candidate_line(line: str) -> bool:
    """A table row carries a date token and at least one '-.-' placeholder."""
    return bool(DATE_PATTERN.search(line)) and NO_DATA in line


class KoeriReportParser:
    """Locate and parse earthquake rows in a KOERI report."""

    def __init__(self):
        self.logger = setup_logger("koeri_report")

    @staticmethod
    def has_markup(text: str) -> bool:
        return "<" in text and ">" in text

    def extract_report_text(self, raw_text: str) -> str:
        """
        Text content of an HTML report, every <pre> block included.

        Tags are dropped without inserting line breaks, so a row with inline
        markup stays on one line. Plain text is returned unchanged.

        Args:
            raw_text (str): Response body as received

        Returns:
            str: Text to run the locator on
        """
        if not self.has_markup(raw_text):
            return raw_text

        return BeautifulSoup(raw_text, "html.parser").get_text()

    def strip_line_markup(self, line: str) -> str:
        """Drop tags and decode entities inside one candidate line."""
        if not self.has_markup(line) and "&" not in line:
            return line
        return BeautifulSoup(line, "html.parser").get_text()

    def scan_lines(self, text: str) -> List[str]:
        """Return every candidate line of text, in order."""
        return [line for line in text.splitlines() if is_candidate_line(line)]

    def find_data_lines(self, raw_text: str) -> List[str]:
        """
        Isolate the lines of the report that hold earthquake rows.

        Primary method: scan every line for the date + '-.-' pair.
        Fallback: anchor on a known header, skip to the first date token
        after it, and scan from there to the end of the text.

        Args:
            raw_text (str): Report text

        Returns:
            list: Candidate data lines, empty if no table was found
        """
        if not raw_text:
            return []

        # Primary method
        lines = self.scan_lines(raw_text)
        if lines:
            self.logger.debug(f"Direct scan found {len(lines)} candidate lines")
            return lines

        self.logger.warning("Direct scan found no data lines, trying header anchors")

        # Fallback mechanism
        header_index = raw_text.find(COLUMN_HEADER)
        if header_index != -1:
            start = header_index + len(COLUMN_HEADER)
            separator = SEPARATOR_PATTERN.search(raw_text, start)
            if separator:
                start = separator.end()
            lines = self._scan_from_first_date(raw_text, start)
            if lines:
                self.logger.debug(
                    f"Found {len(lines)} candidate lines after column header"
                )
                return lines

        for header in ALTERNATE_HEADERS:
            index = raw_text.find(header)
            if index == -1:
                continue

            self.logger.debug(f"Found alternate header '{header}' at position {index}")
            lines = self._scan_from_first_date(raw_text, index)
            if lines:
                self.logger.debug(
                    f"Found {len(lines)} candidate lines after header '{header}'"
                )
                return lines

        self.logger.warning("Could not find earthquake data section in the report")
        return []

    def _scan_from_first_date(self, raw_text: str, start: int) -> List[str]:
        match = DATE_PATTERN.search(raw_text, start)
        if not match:
            return []
        return self.scan_lines(raw_text[match.start():])

    @staticmethod
    def parse_number(token: str) -> float:
        """Plain decimal column; nan, inf and 1_000 style tokens are rejected."""
        if not NUMBER_PATTERN.match(token):
            raise ValueError(f"not a decimal number: {token!r}")
        return float(token)

    @classmethod
    def parse_magnitude(cls, token: str) -> Optional[float]:
        """Convert a magnitude column, '-.-' meaning not computed."""
        if token == NO_DATA:
            return None
        return cls.parse_number(token)

    def parse_line(self, line: str) -> Optional[EarthquakeRecord]:
        """
        Convert one report row into an EarthquakeRecord.

        Args:
            line (str): A candidate data line

        Returns:
            EarthquakeRecord: Parsed record, or None if the line is not a
            well-formed row
        """
        line = line.strip()
        if not line:
            return None

        if not DATA_LINE_PATTERN.match(line):
            self.logger.debug(f"Skipping line without leading date/time: {line}")
            return None

        parts = line.split()
        if len(parts) < MIN_TOKENS:
            self.logger.warning(f"Skipping invalid data line: {line}")
            return None

        try:
            solution_quality = parts[-1]
            location_end = len(parts) - 1

            # a "(14:00:00)" revision stamp may sit right before REVIZEnn
            if solution_quality.startswith(REVISION_PREFIX) and parts[-2].startswith("("):
                location_end -= 1

            return EarthquakeRecord(
                date=parts[0],
                time=parts[1],
                latitude=self.parse_number(parts[2]),
                longitude=self.parse_number(parts[3]),
                depth=self.parse_number(parts[4]),
                magnitude_md=self.parse_magnitude(parts[5]),
                magnitude_ml=self.parse_magnitude(parts[6]),
                magnitude_mw=self.parse_magnitude(parts[7]),
                location=" ".join(parts[8:location_end]),
                solution_quality=solution_quality,
            )
        except (ValueError, IndexError) as e:
            self.logger.warning(f"Error parsing line '{line}': {e}")
            return None

    def parse_report(self, raw_text: str) -> List[EarthquakeRecord]:
        """
        Turn a raw KOERI response body into earthquake records.

        The raw body is scanned line by line first, with markup stripped
        from each candidate row. Only when that yields nothing for an HTML
        body is the document's text content scanned instead.
        Malformed rows are dropped one by one; the call itself never raises.

        Args:
            raw_text (str): Response body (HTML or plain text)

        Returns:
            list: EarthquakeRecord objects in report order
        """
        raw_text = raw_text or ""
        records = self._parse_text(raw_text)
        if records or not self.has_markup(raw_text):
            return records

        self.logger.warning("No rows parsed from raw body, retrying on HTML text content")
        try:
            text = self.extract_report_text(raw_text)
        except Exception as e:
            self.logger.error(f"Error extracting HTML text: {e}")
            return []
        return self._parse_text(text)

    def _parse_text(self, text: str) -> List[EarthquakeRecord]:
        try:
            lines = self.find_data_lines(text)
        except Exception as e:
            self.logger.error(f"Error locating earthquake data: {e}")
            return []

        records = []
        for line in lines:
            try:
                record = self.parse_line(self.strip_line_markup(line))
            except Exception as e:
                self.logger.error(f"Unexpected error on line '{line}': {e}")
                continue
            if record is not None:
                records.append(record)

        self.logger.info(
            f"Successfully parsed {len(records)} earthquakes from {len(lines)} candidate lines"
        )
        return records


_default_parser = None


def _parser() -> KoeriReportParser:
    global _default_parser
    if _default_parser is None:
        _default_parser = KoeriReportParser()
    return _default_parser


def find_data_lines(raw_text: str) -> List[str]:
    return _parser().find_data_lines(raw_text)


def parse_line(line: str) -> Optional[EarthquakeRecord]:
    return _parser().parse_line(line)


def parse_report(raw_text: str) -> List[EarthquakeRecord]:
    return _parser().parse_report(raw_text)
