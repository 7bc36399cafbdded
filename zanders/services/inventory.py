from typing import Dict, Iterator, List

from zanders.services.catalog import Catalog, to_catalog_item

INVENTORY_KEYS = ("item_identifier", "quantity", "price")


def to_inventory_item(row: Dict) -> Dict:
    item = to_catalog_item(row)
    return {k: item[k] for k in INVENTORY_KEYS if k in item}


class Inventory(Catalog):
    """Quantity/price view of the catalog file, for frequent stock syncs."""

    def all(self, chunk_size: int = 15) -> Iterator[List[Dict]]:
        for chunk in self.stream(chunk_size):
            yield [to_inventory_item(row) for row in chunk]
