from typing import Union

from zanders.api import decode_item_info, return_pairs
from zanders.config import ITEM_API_URL
from zanders.models import ItemInfo, map_of
from zanders.services.base import SoapService


class ItemService(SoapService):

    def get_info(self, item_number: str) -> ItemInfo:
        request = map_of(
            ("username", self.credentials.username),
            ("password", self.credentials.password),
            ("itemnumber", item_number),
        )
        response = self.soap_client(ITEM_API_URL).call("get_item_info", request)
        return decode_item_info(return_pairs(response, "get_item_info"), item_number)

    def get_quantity(self, item_number: str) -> Union[int, ItemInfo]:
        """Available count for one item, or the failed ItemInfo when the vendor says no."""
        info = self.get_info(item_number)
        if not info.success:
            return info
        return info.quantity or 0
