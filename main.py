from typing import Callable, List, NamedTuple, Optional
from urllib.parse import quote

import requests
import urllib3

import config
from scraper.fallback_data import get_fallback_earthquakes
from scraper.koeri_report import KoeriReportParser
from scraper.log_setup import setup_logger
from scraper.models import EarthquakeRecord

FALLBACK_SOURCE = "fallback"


class Stage(NamedTuple):
    """One data source attempt: a name and a loader returning records."""

    name: str
    load: Callable[[], List[EarthquakeRecord]]


class StageAttempt(NamedTuple):
    name: str
    ok: bool
    reason: str


class FetchResult(NamedTuple):
    records: List[EarthquakeRecord]
    source: str
    attempts: List[StageAttempt]

    @property
    def is_fallback(self):
        return self.source == FALLBACK_SOURCE


class EarthquakeFetcher:
    """
    Acquisition chain for the KOERI recent earthquake report.

    Stages are tried strictly one after another and the first one that
    yields at least one parsed record wins:

    1. direct        - GET the KOERI report
    2. relay         - GET the same report through our own /api/proxy
    3. public_proxy  - GET it through a public CORS proxy
    4. fallback      - bundled sample events, always succeeds

    A transport error, a non-2xx status and a response with zero parsed
    records all count as failure and move on to the next stage. No stage
    retries itself.
    """

    def __init__(
        self,
        koeri_url: str = config.KOERI_URL,
        relay_url: Optional[str] = config.RELAY_URL,
        public_proxy_url: str = config.PUBLIC_PROXY_URL,
        timeout: float = config.REQUEST_TIMEOUT,
        verify_ssl: bool = config.VERIFY_SSL,
        parser: KoeriReportParser = None,
    ):
        self.koeri_url = koeri_url
        self.relay_url = relay_url
        self.public_proxy_url = public_proxy_url
        self.timeout = timeout
        self.verify_ssl = verify_ssl
        self.parser = parser or KoeriReportParser()
        self.logger = setup_logger("earthquake_fetcher")

        if not verify_ssl:
            # Disable SSL warnings
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    def fetch_response(self, url: str, headers: dict = None) -> requests.Response:
        """
        GET a URL with the stage timeout.

        Args:
            url (str): The URL to fetch
            headers (dict): Request headers

        Returns:
            requests.Response: Successful HTTP response object

        Raises:
            requests.exceptions.RequestException: On network failure,
            timeout or non-success status
        """
        response = requests.get(
            url,
            headers=headers,
            timeout=(self.timeout, self.timeout),
            verify=self.verify_ssl,
        )
        response.raise_for_status()
        return response

    def fetch_upstream(self) -> requests.Response:
        """Raw KOERI response, used as-is by the relay endpoint."""
        return self.fetch_response(self.koeri_url, headers=config.BROWSER_HEADERS)

    def decode(self, response: requests.Response) -> str:
        """Response body as text, detecting the charset when none is declared."""
        # KOERI does not always declare a charset; requests would assume Latin-1
        content_type = response.headers.get("Content-Type", "")
        if "charset" not in content_type.lower():
            response.encoding = response.apparent_encoding or "utf-8"

        text = response.text
        self.logger.info(
            f"Successfully fetched: {response.url} (Status: {response.status_code}, Length: {len(text)})"
        )
        return text

    def fetch_page(self, url: str, headers: dict = None) -> str:
        """Fetch a page and return its decoded body."""
        return self.decode(self.fetch_response(url, headers=headers))

    def fetch_direct(self) -> List[EarthquakeRecord]:
        response = self.fetch_upstream()
        return self.parser.parse_report(self.decode(response))

    def fetch_via_relay(self) -> List[EarthquakeRecord]:
        text = self.fetch_page(self.relay_url, headers={"Cache-Control": "no-cache"})
        return self.parser.parse_report(text)

    def fetch_via_public_proxy(self) -> List[EarthquakeRecord]:
        url = f"{self.public_proxy_url}{quote(self.koeri_url, safe='')}"
        text = self.fetch_page(url, headers={"Cache-Control": "no-cache"})
        return self.parser.parse_report(text)

    def stages(self) -> List[Stage]:
        """Live sources in order of preference; no relay stage without a relay URL."""
        stages = [Stage("direct", self.fetch_direct)]
        if self.relay_url:
            stages.append(Stage("relay", self.fetch_via_relay))
        stages.append(Stage("public_proxy", self.fetch_via_public_proxy))
        return stages

    def fetch(self) -> FetchResult:
        """
        Run one acquisition cycle.

        Never raises: every failure path ends in the bundled fallback data.

        Returns:
            FetchResult: Records, the name of the stage that produced them
            and the outcome of each attempted stage
        """
        attempts = []

        for stage in self.stages():
            self.logger.info(f"Trying earthquake source: {stage.name}")
            try:
                records = stage.load()
            except requests.exceptions.RequestException as e:
                self.logger.warning(f"Source '{stage.name}' failed: {e}")
                attempts.append(StageAttempt(stage.name, False, str(e)))
                continue
            except Exception as e:
                self.logger.error(f"Unexpected error from source '{stage.name}': {e}")
                attempts.append(StageAttempt(stage.name, False, str(e)))
                continue

            if not records:
                self.logger.warning(f"No earthquakes parsed from source '{stage.name}'")
                attempts.append(StageAttempt(stage.name, False, "no records parsed"))
                continue

            attempts.append(StageAttempt(stage.name, True, f"{len(records)} records"))
            self.logger.info(f"Using {len(records)} earthquakes from source '{stage.name}'")
            return FetchResult(records, stage.name, attempts)

        self.logger.warning("All live sources failed, using fallback earthquake data")
        records = get_fallback_earthquakes()
        attempts.append(StageAttempt(FALLBACK_SOURCE, True, f"{len(records)} records"))
        return FetchResult(records, FALLBACK_SOURCE, attempts)


def fetch_earthquake_data() -> List[EarthquakeRecord]:
    """Latest earthquake records; falls back to sample data, never raises."""
    return EarthquakeFetcher().fetch().records


def is_fallback_data(records: List[EarthquakeRecord]) -> bool:
    return bool(records) and all(record.is_fallback for record in records)


if __name__ == "__main__":
    result = EarthquakeFetcher().fetch()

    print("\n=== EARTHQUAKE FETCH COMPLETED ===")
    for attempt in result.attempts:
        status = "ok" if attempt.ok else "failed"
        print(f"- {attempt.name}: {status} ({attempt.reason})")
    print(f"Source: {result.source}")
    print(f"Earthquakes: {len(result.records)}")
