import os

from dotenv import load_dotenv

# Load env
load_dotenv()


def _env_bool(name, default):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# Upstream KOERI (Kandilli Observatory) report
KOERI_URL = os.getenv("KOERI_URL", "http://www.koeri.boun.edu.tr/scripts/lst9.asp")

# Same-origin relay served by app.py
RELAY_URL = os.getenv("RELAY_URL", "http://localhost:5000/api/proxy")

# Public CORS proxy, target URL is appended url-encoded
PUBLIC_PROXY_URL = os.getenv("PUBLIC_PROXY_URL", "https://corsproxy.io/?")

# Seconds per acquisition stage
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "10"))

# Seconds between automatic refresh cycles
REFRESH_INTERVAL = int(os.getenv("REFRESH_INTERVAL", "60"))

VERIFY_SSL = _env_bool("VERIFY_SSL", True)

LOG_DIR = os.getenv("LOG_DIR", "logs")
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "5000"))

# KOERI gates on a browser-like client
BROWSER_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
    "Cache-Control": "no-cache",
}
