from zanders.config import ZandersConfig
from zanders.exceptions import MalformedResponse, MissingArgument, NotAuthenticated
from zanders.models import Address, OrderItem, ShippingDetails
from zanders.services.address import AddressService
from zanders.services.catalog import Catalog
from zanders.services.inventory import Inventory
from zanders.services.item import ItemService
from zanders.services.order import OrderService
from zanders.services.user import User

__version__ = "0.1.0"
