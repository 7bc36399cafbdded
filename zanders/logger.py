import os
import logging
from logging.handlers import RotatingFileHandler
from zanders.config import LOG_DIR, LOG_FILE

ROOT_NAME = "zanders"


class PackageFileHandler(RotatingFileHandler):
    """Rotating file handler that creates its directory on first write, not at import."""

    def __init__(self, filename: str):
        super().__init__(
            filename,
            maxBytes=5 * 1024 * 1024,   # 5 MB
            backupCount=5,
            encoding="utf-8",
            delay=True,
        )

    def _open(self):
        os.makedirs(os.path.dirname(self.baseFilename), exist_ok=True)
        return super()._open()


def _root() -> logging.Logger:
    root = logging.getLogger(ROOT_NAME)
    if any(isinstance(h, PackageFileHandler) for h in root.handlers):
        return root

    root.setLevel(logging.DEBUG)
    handler = PackageFileHandler(os.path.join(LOG_DIR, LOG_FILE))
    handler.setFormatter(logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s"))
    root.addHandler(handler)
    return root

def get_logger(name: str) -> logging.Logger:
    """Child of the package logger; all modules share one rotating file."""
    _root()
    return logging.getLogger(f"{ROOT_NAME}.{name}")
