from typing import List, Optional, Sequence

from zanders.api import (
    decode_create_order, decode_order_info, decode_tracking_info, return_pairs,
)
from zanders.config import ORDER_API_URL, today_iso
from zanders.exceptions import MalformedResponse
from zanders.models import (
    BOOLEAN_TYPE, Address, ArrayNode, Credentials, MapNode, OrderInfo, OrderItem,
    OrderResult, Pair, Scalar, ShippingDetails, TrackingInfo, map_of,
)
from zanders.services.address import AddressService
from zanders.services.base import SoapService, requires
from zanders.logger import get_logger

log = get_logger("order")

SHIP_VIA_CODE = "UG"
NAME_WIDTH = 40


# ---------------- Request encoding ----------------
def format_shipping_instructions(name: str, phone_number: Optional[str]) -> str:
    """
    Name padded/truncated to exactly 40 characters followed directly by the
    phone number. This fixed layout is what the vendor parses.
    """
    return name[:NAME_WIDTH].ljust(NAME_WIDTH) + (phone_number or "")

def build_order_items(items: Sequence[OrderItem]) -> ArrayNode:
    return ArrayNode(tuple(
        map_of(
            ("itemNumber", item.item_number),
            ("quantity", item.quantity),
            ("allowBackOrder", Scalar(item.allow_back_order, BOOLEAN_TYPE)),
        )
        for item in items
    ))

def check_address(address: Address) -> None:
    if address.fflno:
        return
    requires(
        address1=address.address1,
        city=address.city,
        state=address.state,
        zip=address.zip,
    )

def build_shipping_information(
    address: Address,
    purchase_order_number: str,
    details: Optional[ShippingDetails] = None,
    ship_to_number: Optional[str] = None,
    ship_date: Optional[str] = None,
) -> List[Pair]:
    pairs = [
        ("shipDate", ship_date or today_iso()),
        ("shipViaCode", SHIP_VIA_CODE),
        ("purchaseOrderNumber", purchase_order_number),
    ]

    if address.fflno:
        requires(ship_to_number=ship_to_number)
        pairs.append(("shipToNo", ship_to_number))
    else:
        pairs.append(("shipToAddress1", address.address1))
        if address.address2:
            pairs.append(("shipToAddress2", address.address2))
        pairs += [
            ("shipToCity", address.city),
            ("shipToState", address.state),
            ("shipToZip", address.zip),
        ]

    if details is not None and details.name:
        pairs.append(("shipInstructions", format_shipping_instructions(details.name, details.phone_number)))

    return list(map_of(*pairs).pairs)

def build_order_request(
    credentials: Credentials,
    items: Sequence[OrderItem],
    shipping_information: List[Pair],
) -> MapNode:
    order = MapNode(tuple(shipping_information) + (Pair("items", build_order_items(items)),))
    return map_of(
        ("username", credentials.username),
        ("password", credentials.password),
        ("order", order),
    )

def build_lookup_request(credentials: Credentials, order_number: str) -> MapNode:
    return map_of(
        ("username", credentials.username),
        ("password", credentials.password),
        ("ordernumber", order_number),
    )


# ---------------- Service ----------------
class OrderService(SoapService):
    """
    Order service: create orders and read back order/tracking info.

    Vendor failures come back as results with success=False and the vendor's
    return code; only transport problems raise.
    """

    def create_order(
        self,
        items: Sequence[OrderItem],
        address: Address,
        purchase_order_number: str,
        details: Optional[ShippingDetails] = None,
    ) -> OrderResult:
        check_address(address)

        ship_to_number = None
        if address.fflno:
            lookup = AddressService(
                self.credentials.username,
                self.credentials.password,
                config=self.config,
                client_factory=self.client_factory,
            ).ship_to_number(address)
            if not lookup.success:
                log.warning(f"PO {purchase_order_number}: ship-to lookup failed ({lookup.error_code}); order not sent")
                return OrderResult(success=False, error_code=lookup.error_code)
            ship_to_number = lookup.ship_to_number
            if ship_to_number in (None, ""):
                raise MalformedResponse(
                    f"PO {purchase_order_number}: ship-to lookup succeeded without a ship-to number",
                    operation="use_ship_to",
                    raw_body=lookup,
                )

        shipping_information = build_shipping_information(address, purchase_order_number, details, ship_to_number)
        request = build_order_request(self.credentials, items, shipping_information)

        response = self.soap_client(ORDER_API_URL).call("create_order", request)
        result = decode_create_order(return_pairs(response, "create_order"))

        if result.success:
            log.info(f"PO {purchase_order_number}: created order {result.order_number}")
        return result

    def get_order(self, order_number: str) -> OrderInfo:
        response = self.soap_client(ORDER_API_URL).call(
            "get_order_info", build_lookup_request(self.credentials, order_number)
        )
        return decode_order_info(return_pairs(response, "get_order_info"), order_number)

    def get_tracking_info(self, order_number: str) -> TrackingInfo:
        response = self.soap_client(ORDER_API_URL).call(
            "get_tracking_info", build_lookup_request(self.credentials, order_number)
        )
        return decode_tracking_info(return_pairs(response, "get_tracking_info"))
