import csv
import os
import tempfile
from typing import Dict, Iterable, Iterator, List, Optional

from zanders.services.base import FtpService
from zanders.logger import get_logger

log = get_logger("catalog")

CATALOG_FILENAME = "zandersinv.csv"

KEY_MAPPING = {
    "available":    "quantity",
    "desc1":        "short_description",
    "itemnumber":   "item_identifier",
    "manufacturer": "brand",
    "mfgpnumber":   "mfg_number",
    "mapprice":     "map_price",
    "price1":       "price",
}

DROPPED_KEYS = ("desc2", "qty1", "qty2", "qty3", "price2", "price3")

INT_FIELDS = ("quantity",)
FLOAT_FIELDS = ("map_price", "price")


def normalize_header(header: str) -> str:
    return header.strip().lower().replace(" ", "_")

def chunked(rows: Iterable[Dict], size: int) -> Iterator[List[Dict]]:
    chunk: List[Dict] = []
    for row in rows:
        chunk.append(row)
        if len(chunk) >= size:
            yield chunk
            chunk = []
    if chunk:
        yield chunk

def read_rows(path: str, encoding: str) -> Iterator[Dict[str, str]]:
    """
    Rows of a headered CSV with normalized, renamed keys. Blank values are
    left out of the row entirely.
    """
    with open(path, newline="", encoding=encoding) as f:
        reader = csv.DictReader(f)
        if not reader.fieldnames:
            raise ValueError(f"{path} has no header row")

        for r in reader:
            row = {}
            for k, v in r.items():
                if not k:
                    continue
                val = v.strip() if isinstance(v, str) else v
                if val in (None, ""):
                    continue
                key = normalize_header(k)
                row[KEY_MAPPING.get(key, key)] = val
            yield row

def _convert(row: Dict) -> Dict:
    # unparseable numbers stay as the vendor's text
    for keys, cast in ((INT_FIELDS, lambda v: int(float(v))), (FLOAT_FIELDS, float)):
        for k in keys:
            if k not in row:
                continue
            try:
                row[k] = cast(row[k])
            except ValueError:
                log.debug(f"{row.get('item_identifier')}: kept non-numeric {k}={row[k]!r}")
    return row

def to_catalog_item(row: Dict) -> Dict:
    item = _convert(dict(row))
    short = item.get("short_description")
    item["name"] = short
    item["long_description"] = f"{short or ''} {item.get('desc2') or ''}"
    for k in DROPPED_KEYS:
        item.pop(k, None)
    return item


class Catalog(FtpService):
    """Full item catalog from the vendor's FTP drop."""

    def all(self, chunk_size: int = 15) -> Iterator[List[Dict]]:
        for chunk in self.stream(chunk_size):
            yield [to_catalog_item(row) for row in chunk]

    def stream(self, chunk_size: int) -> Iterator[List[Dict]]:
        fd, path = tempfile.mkstemp(suffix=".csv")
        os.close(fd)
        try:
            with self.connect() as ftp:
                ftp.chdir(self.config.ftp_directory)
                ftp.getbinaryfile(CATALOG_FILENAME, path)

            count = 0
            for chunk in chunked(read_rows(path, self.config.file_encoding), chunk_size):
                count += len(chunk)
                yield chunk
            log.info(f"{CATALOG_FILENAME}: streamed {count} rows")
        finally:
            os.unlink(path)


def all_items(username: Optional[str] = None, password: Optional[str] = None,
              chunk_size: int = 15, **kwargs) -> Iterator[List[Dict]]:
    return Catalog(username, password, **kwargs).all(chunk_size)
