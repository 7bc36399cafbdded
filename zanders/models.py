#models.py
from dataclasses import dataclass, field, fields
from typing import Optional, Tuple, Union, Dict, Any

# ---------------- Inputs ----------------
@dataclass(frozen=True)
class Credentials:
    username: str
    password: str = field(repr=False)

@dataclass(frozen=True)
class OrderItem:
    item_number: str
    quantity: int
    allow_back_order: bool = False

@dataclass(frozen=True)
class Address:
    address1: Optional[str] = None
    address2: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    fflno: Optional[str] = None      # ship-to lookup replaces the postal fields
    fflexp: Optional[str] = None

@dataclass(frozen=True)
class ShippingDetails:
    name: Optional[str] = None
    phone_number: Optional[str] = None


# ---------------- Wire tree ----------------
# Vendor SOAP payloads are ordered key/value lists typed as ns2:Map, with
# arrays of maps typed SOAP-ENC:Array. Order matters on both directions.
MAP_TYPE = "ns2:Map"
MAP_ARRAY_TYPE = "ns2:Map[2]"
BOOLEAN_TYPE = "xsd:boolean"

@dataclass(frozen=True)
class Scalar:
    value: Any
    xsi_type: Optional[str] = None

@dataclass(frozen=True)
class Pair:
    key: Optional[str]
    value: "Node"

@dataclass(frozen=True)
class MapNode:
    pairs: Tuple[Pair, ...] = ()
    type_tag: str = MAP_TYPE

    def __len__(self) -> int:
        return len(self.pairs)

    def keys(self) -> list:
        return [p.key for p in self.pairs]

    def get(self, key: str) -> Optional["Node"]:
        for p in self.pairs:
            if p.key == key:
                return p.value
        return None

    def first(self) -> Pair:
        return self.pairs[0]

    def last(self) -> Pair:
        return self.pairs[-1]

@dataclass(frozen=True)
class ArrayNode:
    items: Tuple[MapNode, ...] = ()
    array_type: str = MAP_ARRAY_TYPE

Node = Union[Scalar, MapNode, ArrayNode]

def scalar(node: Optional[Node]) -> Any:
    """Leaf value of a node, or None when the node is missing or nested."""
    return node.value if isinstance(node, Scalar) else None

def map_of(*pairs: Tuple[str, Any]) -> MapNode:
    """Build a MapNode from (key, value) tuples; plain values become Scalars."""
    return MapNode(tuple(
        Pair(k, v if isinstance(v, (Scalar, MapNode, ArrayNode)) else Scalar(v))
        for k, v in pairs
    ))


# ---------------- Results ----------------
class _Result:
    def as_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}

@dataclass(frozen=True)
class OrderResult(_Result):
    success: bool
    order_number: Optional[str] = None
    error_code: Optional[str] = None
    error_message: Optional[str] = None

@dataclass(frozen=True)
class OrderInfo(_Result):
    success: bool
    order_number: Optional[str] = None
    purchase_order_number: Optional[str] = None
    order_date: Optional[str] = None
    order_entered_date: Optional[str] = None
    order_ship_date: Optional[str] = None
    subtotal: Optional[str] = None
    freight: Optional[str] = None
    misc_fee: Optional[str] = None
    selection_code: Optional[str] = None
    date_picked: Optional[str] = None
    grand_total: Optional[str] = None
    error_code: Optional[str] = None
    error_message: Optional[str] = None

@dataclass(frozen=True)
class TrackingInfo(_Result):
    success: bool
    company: Optional[str] = None
    via: Optional[str] = None
    tracking_number: Optional[str] = None
    weight: Optional[str] = None
    url: Optional[str] = None
    error_code: Optional[str] = None
    error_message: Optional[str] = None

@dataclass(frozen=True)
class ShipToResult(_Result):
    success: bool
    ship_to_number: Optional[str] = None
    error_code: Optional[str] = None
    error_message: Optional[str] = None

@dataclass(frozen=True)
class ItemInfo(_Result):
    success: bool
    item_number: Optional[str] = None
    description: Optional[str] = None
    quantity: Optional[int] = None
    price: Optional[str] = None
    map_price: Optional[str] = None
    brand: Optional[str] = None
    upc: Optional[str] = None
    weight: Optional[str] = None
    error_code: Optional[str] = None
    error_message: Optional[str] = None
