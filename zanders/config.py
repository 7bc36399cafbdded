import os
from dataclasses import dataclass
from datetime import date

import requests
from requests.adapters import HTTPAdapter

# ---------------- Endpoints ----------------
ADDRESS_API_URL = "https://shop2.gzanders.com/webservice/shiptoaddresses?wsdl"
ORDER_API_URL   = "https://shop2.gzanders.com/webservice/orders?wsdl"
ITEM_API_URL    = "https://shop2.gzanders.com/webservice/items?wsdl"

DEFAULTS = {
    "DEBUG": False,
    "FILE_ENCODING": "Windows-1252",
    "FTP_HOST": "ftp2.gzanders.com",
    "FTP_DIRECTORY": "Inventory/AmmoReady",
}

# ---------------- Paths (stable, absolute) ----------------
BASE_DIR = os.path.dirname(os.path.abspath(__file__))

# Logging
LOG_DIR = os.getenv("ZANDERS_LOG_DIR", os.path.join(BASE_DIR, "logs"))
LOG_FILE = os.getenv("ZANDERS_LOG_FILE", "zanders.log")


@dataclass(frozen=True)
class ZandersConfig:
    """Process-wide settings. Build once, hand the same instance to every service."""
    debug_mode: bool = DEFAULTS["DEBUG"]
    file_encoding: str = DEFAULTS["FILE_ENCODING"]
    ftp_host: str = DEFAULTS["FTP_HOST"]
    ftp_directory: str = DEFAULTS["FTP_DIRECTORY"]

    @classmethod
    def from_env(cls) -> "ZandersConfig":
        return cls(
            debug_mode=os.getenv("ZANDERS_DEBUG", "").strip().lower() in ("1", "true", "yes"),
            file_encoding=os.getenv("ZANDERS_FILE_ENCODING", DEFAULTS["FILE_ENCODING"]),
            ftp_host=os.getenv("ZANDERS_FTP_HOST", DEFAULTS["FTP_HOST"]),
            ftp_directory=os.getenv("ZANDERS_FTP_DIRECTORY", DEFAULTS["FTP_DIRECTORY"]),
        )


# -------------- HTTP Session --------------
def build_session() -> requests.Session:
    # single attempt per call; failures surface to the caller as-is
    session = requests.Session()
    session.mount("http://", HTTPAdapter(max_retries=0))
    session.mount("https://", HTTPAdapter(max_retries=0))
    return session

def today_iso() -> str:
    return date.today().strftime("%Y-%m-%d")
