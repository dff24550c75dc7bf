import sys
import time

from main import EarthquakeFetcher
from refresh import RefreshController
from scraper.log_setup import setup_logger

SAMPLE_NOTICE = "Örnek veri kullanılıyor (canlı veri kaynağına bağlanılamadı)"


def format_row(record):
    """One table row: date, time, lat, lon, depth, ML, location."""
    ml = f"{record.magnitude_ml:.1f}" if record.magnitude_ml else "-"
    return (
        f"{record.date}  {record.time}  {record.latitude:8.4f}  {record.longitude:8.4f}"
        f"  {record.depth:6.1f}  {ml:>4}  {record.location}"
    )


def print_table(controller):
    if controller.is_fallback:
        print(SAMPLE_NOTICE)
    if controller.error:
        print(controller.error)

    print(f"{len(controller.records)} earthquakes (source: {controller.source})")
    print("Tarih       Saat      Enlem     Boylam    Derinlik  ML    Yer")
    for record in controller.records:
        print(format_row(record))


def watch(controller):
    """Print the table after each refresh; one tick per second."""
    print_table(controller)
    while True:
        time.sleep(1)
        if controller.tick():
            print()
            print_table(controller)


def main(argv=None):
    """Fetch once and print, or keep refreshing with --watch"""
    argv = sys.argv[1:] if argv is None else argv
    logger = setup_logger("fetch_quakes")

    logger.info("=== EARTHQUAKE FETCH STARTED ===")
    controller = RefreshController(fetch=EarthquakeFetcher().fetch)
    controller.refresh()

    if "--watch" in argv:
        try:
            watch(controller)
        except KeyboardInterrupt:
            logger.info("Watch stopped by user")
        return 0

    print_table(controller)
    logger.info(f"=== EARTHQUAKE FETCH COMPLETED (source: {controller.source}) ===")

    # Non-zero tells cron/shell callers that no live source answered
    return 1 if controller.is_fallback else 0


if __name__ == "__main__":
    sys.exit(main())
