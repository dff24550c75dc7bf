import threading
from datetime import datetime

import config
from main import FALLBACK_SOURCE, EarthquakeFetcher, FetchResult
from scraper.log_setup import setup_logger
from scraper.magnitude import describe

IDLE = "idle"
FETCHING = "fetching"

ERROR_MESSAGE = (
    "Deprem verilerini yüklerken bir hata oluştu. Lütfen daha sonra tekrar deneyin."
)


class RefreshController:
    """
    Refresh state for one earthquake view.

    Holds the current record list and drives the acquisition cycles, either
    on an explicit refresh() or when the countdown kept by tick() runs out.
    Only one cycle can be in flight; while the state is FETCHING further
    triggers are ignored.
    """

    def __init__(self, fetch=None, interval: int = config.REFRESH_INTERVAL):
        self.fetch = fetch or EarthquakeFetcher().fetch
        self.interval = interval
        self.logger = setup_logger("refresh_controller")

        self.state = IDLE
        self.records = []
        self.source = None
        self.last_updated = None
        self.error = None
        self.countdown = interval

        self._lock = threading.Lock()

    @property
    def is_fallback(self) -> bool:
        return self.source == FALLBACK_SOURCE

    def refresh(self) -> bool:
        """
        Run one acquisition cycle unless one is already running.

        Returns:
            bool: False if a cycle was already in flight, True otherwise
        """
        with self._lock:
            if self.state == FETCHING:
                self.logger.info("Refresh skipped, a fetch is already running")
                return False
            self.state = FETCHING
            self.error = None
            self.countdown = self.interval

        try:
            result: FetchResult = self.fetch()
        except Exception as e:
            self.logger.error(f"Error fetching earthquake data: {e}")
            with self._lock:
                self.error = ERROR_MESSAGE
                self.state = IDLE
            return True

        with self._lock:
            # Replace, never merge with the previous list
            self.records = list(result.records)
            self.source = result.source
            self.last_updated = datetime.now()
            self.state = IDLE

        self.logger.info(
            f"Refreshed {len(result.records)} earthquakes from source '{result.source}'"
        )
        return True

    def tick(self, seconds: int = 1) -> bool:
        """
        Advance the countdown; refresh when it runs out.

        Returns:
            bool: True if this tick started a refresh
        """
        with self._lock:
            if self.state == FETCHING:
                return False
            self.countdown -= seconds
            due = self.countdown <= 0

        if due:
            return self.refresh()
        return False

    def format_countdown(self) -> str:
        seconds = max(self.countdown, 0)
        return f"{seconds // 60}:{seconds % 60:02d}"

    def snapshot(self) -> dict:
        """JSON-ready view of the current state and records."""
        with self._lock:
            records = self.records
            return {
                "state": self.state,
                "source": self.source,
                "isFallback": self.is_fallback,
                "lastUpdated": self.last_updated.isoformat() if self.last_updated else None,
                "countdown": self.format_countdown(),
                "error": self.error,
                "count": len(records),
                "earthquakes": [describe(record) for record in records],
            }
