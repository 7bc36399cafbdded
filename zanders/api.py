#api.py
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional

from zeep import Client, helpers, xsd
from zeep.transports import Transport

from zanders.config import ZandersConfig, build_session
from zanders.exceptions import MalformedResponse
from zanders.models import (
    BOOLEAN_TYPE, ArrayNode, MapNode, Node, Pair, Scalar, scalar,
    OrderResult, OrderInfo, TrackingInfo, ShipToResult, ItemInfo,
)
from zanders.logger import get_logger

log = get_logger("api")

SUCCESS = "0"

# Vendor return codes (shared by the order, ship-to and item services)
RETURN_CODES = {
    "0": "Success",
    "1": "Username and/or Password were incorrect",
    "2": "There was a problem creating the order",
    "5": "Cannot create order with no items",
    "9": "Order not created because all items not available and not to be back ordered",
    "10": "Ship date cannot be before today",
    "11": "Ship date cannot be more than 30 days in the future",
    "21": "The order number is NOT connected to your customer number",
    "31": "Can NOT add item with quantity of less than 1",
    "41": "The item number requested is NOT connected to this order",
}

NO_TRACKING_MESSAGE = "No present tracking information"

APACHE_MAP = "{http://xml.apache.org/xml-soap}Map"
SOAP_ENC_ARRAY = "{http://schemas.xmlsoap.org/soap/encoding/}Array"


@dataclass(frozen=True)
class SoapResponse:
    body: Dict[str, Any]


def camelize(operation: str) -> str:
    head, *rest = operation.split("_")
    return head + "".join(p.capitalize() for p in rest)


class SoapTransport:
    """zeep client for one vendor WSDL endpoint. One instance per call site."""

    def __init__(self, wsdl_url: str, config: ZandersConfig, client: Optional[Client] = None):
        self.wsdl_url = wsdl_url
        self.config = config
        self.client = client or Client(wsdl=wsdl_url, transport=Transport(session=build_session()))

    def call(self, operation: str, message: MapNode) -> SoapResponse:
        params = {p.key: self._render(p.value) for p in message.pairs}

        if self.config.debug_mode:
            log.debug(f"Sending '{operation}' to {self.wsdl_url}: {redact(message)}")

        result = getattr(self.client.service, camelize(operation))(**params)
        body = {f"{operation}_response": {"return": helpers.serialize_object(result, dict)}}

        if self.config.debug_mode:
            log.debug(f"'{operation}' response: {body}")
        return SoapResponse(body)

    def _render(self, node: Node) -> Any:
        if isinstance(node, Scalar):
            if node.xsi_type == BOOLEAN_TYPE:
                return xsd.AnyObject(xsd.Boolean(), bool(node.value))
            return node.value

        if isinstance(node, MapNode):
            map_type = self.client.get_type(APACHE_MAP)
            entries = [{"key": p.key, "value": self._render(p.value)} for p in node.pairs]
            return xsd.AnyObject(map_type, map_type(item=entries))

        if isinstance(node, ArrayNode):
            array_type = self.client.get_type(SOAP_ENC_ARRAY)
            maps = [self._render(m) for m in node.items]
            return xsd.AnyObject(array_type, array_type(_value_1=maps, arrayType=node.array_type))

        raise TypeError(f"Cannot render {type(node).__name__} as SOAP value")


def soap_client(wsdl_url: str, config: ZandersConfig) -> SoapTransport:
    return SoapTransport(wsdl_url, config)

ClientFactory = Callable[[str], Any]


def redact(message: MapNode) -> MapNode:
    return MapNode(tuple(
        Pair(p.key, Scalar("[FILTERED]")) if p.key == "password" else p
        for p in message.pairs
    ), message.type_tag)


# ---------------- Wire -> tree ----------------
def _is_pair(value: Any) -> bool:
    return isinstance(value, Mapping) and "item" not in value and ("key" in value or "value" in value)

def from_wire(value: Any) -> Node:
    """
    Convert a serialized SOAP value into the wire tree.

    A mapping with an "item" entry is a Map when its items are key/value
    pairs and an Array when they are themselves maps. Single entries may
    arrive collapsed (a mapping instead of a one-element list).
    """
    if isinstance(value, Mapping) and "item" in value:
        items = value["item"]
        if items is None:
            return MapNode()
        if not isinstance(items, list):
            items = [items]
        if all(_is_pair(i) for i in items):
            return MapNode(tuple(Pair(i.get("key"), from_wire(i.get("value"))) for i in items))
        return ArrayNode(tuple(_as_map(from_wire(i)) for i in items))

    if isinstance(value, list):
        return ArrayNode(tuple(_as_map(from_wire(i)) for i in value))

    return Scalar(value)

def _as_map(node: Node) -> MapNode:
    if isinstance(node, MapNode):
        return node
    if isinstance(node, ArrayNode) and len(node.items) == 1:
        return node.items[0]
    raise MalformedResponse(f"Expected a map inside an array, got {node!r}")


def return_pairs(response: SoapResponse, operation: str) -> MapNode:
    body = response.body or {}
    try:
        items = body[f"{operation}_response"]["return"]["item"]
    except (KeyError, TypeError):
        raise MalformedResponse(f"'{operation}' response has no return items", operation=operation, raw_body=body)

    tree = from_wire({"item": items})
    if not isinstance(tree, MapNode) or not tree.pairs:
        raise MalformedResponse(f"'{operation}' response has no return code", operation=operation, raw_body=body)
    return tree

def return_code(tree: MapNode) -> str:
    value = scalar(tree.first().value)
    return "" if value is None else str(value)


def _project(tree: MapNode, keymap: Dict[str, str]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for p in tree.pairs:
        if p.key in keymap:
            out[keymap[p.key]] = scalar(p.value)
    return out

def _failure(result_cls, code: str, operation: str):
    log.warning(f"{operation} failed: code={code} ({RETURN_CODES.get(code, 'unknown code')})")
    return result_cls(success=False, error_code=code)


# ---------------- Per-operation decoders ----------------
ORDER_INFO_KEYS = {
    "purchaseOrderNumber": "purchase_order_number",
    "orderDate":           "order_date",
    "orderEnteredDate":    "order_entered_date",
    "orderShipDate":       "order_ship_date",
    "subtotal":            "subtotal",
    "freight":             "freight",
    "miscFee":             "misc_fee",
    "selectionCode":       "selection_code",
    "datePicked":          "date_picked",
    "grandTotal":          "grand_total",
}

TRACKING_KEYS = {
    "shipCompany":    "company",
    "shipVia":        "via",
    "trackingNumber": "tracking_number",
    "weight":         "weight",
    "url":            "url",
}

ITEM_INFO_KEYS = {
    "itemNumber":      "item_number",
    "itemDescription": "description",
    "available":       "quantity",
    "price":           "price",
    "mapPrice":        "map_price",
    "manufacturer":    "brand",
    "upc":             "upc",
    "weight":          "weight",
}


def decode_create_order(tree: MapNode) -> OrderResult:
    code = return_code(tree)
    if code != SUCCESS:
        return _failure(OrderResult, code, "create_order")
    # the order number is the last item and carries no usable key
    return OrderResult(success=True, order_number=scalar(tree.last().value))

def decode_order_info(tree: MapNode, order_number: str) -> OrderInfo:
    code = return_code(tree)
    if code != SUCCESS:
        return _failure(OrderInfo, code, "get_order_info")
    return OrderInfo(success=True, order_number=order_number, **_project(tree, ORDER_INFO_KEYS))

def decode_tracking_info(tree: MapNode) -> TrackingInfo:
    code = return_code(tree)
    if code != SUCCESS:
        return _failure(TrackingInfo, code, "get_tracking_info")

    shipments = scalar(tree.get("numberOfShipments"))
    if shipments is None or str(shipments) == "0":
        return TrackingInfo(success=False, error_code=code, error_message=NO_TRACKING_MESSAGE)

    shipment = _first_shipment(tree.get("trackingNumbers"))
    if shipment is None:
        raise MalformedResponse(
            f"numberOfShipments={shipments} but trackingNumbers is missing",
            operation="get_tracking_info",
            raw_body=tree,
        )
    return TrackingInfo(success=True, **_project(shipment, TRACKING_KEYS))

def _first_shipment(node: Optional[Node]) -> Optional[MapNode]:
    if isinstance(node, ArrayNode):
        return node.items[0] if node.items else None
    if isinstance(node, MapNode) and node.pairs:
        inner = node.first().value
        return inner if isinstance(inner, MapNode) else node
    return None

def decode_ship_to(tree: MapNode) -> ShipToResult:
    code = return_code(tree)
    if code != SUCCESS:
        return _failure(ShipToResult, code, "use_ship_to")
    return ShipToResult(success=True, ship_to_number=scalar(tree.last().value))

def decode_item_info(tree: MapNode, item_number: str) -> ItemInfo:
    code = return_code(tree)
    if code != SUCCESS:
        return _failure(ItemInfo, code, "get_item_info")

    info = {"item_number": item_number}
    info.update(_project(tree, ITEM_INFO_KEYS))
    available = info.pop("quantity", None)
    if available not in (None, ""):
        try:
            info["quantity"] = int(available)
        except ValueError:
            log.warning(f"get_item_info {item_number}: non-numeric available={available!r}")
    return ItemInfo(success=True, **info)
