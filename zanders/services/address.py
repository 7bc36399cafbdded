from zanders.api import decode_ship_to, return_pairs
from zanders.config import ADDRESS_API_URL
from zanders.models import Address, ShipToResult, map_of
from zanders.services.base import SoapService, requires
from zanders.logger import get_logger

log = get_logger("address")


class AddressService(SoapService):
    """Resolves a firearms-license number to a vendor ship-to number."""

    def ship_to_number(self, address: Address) -> ShipToResult:
        requires(fflno=address.fflno)

        request = [
            ("username", self.credentials.username),
            ("password", self.credentials.password),
            ("fflno", address.fflno),
        ]
        if address.fflexp:
            request.append(("fflexp", address.fflexp))

        response = self.soap_client(ADDRESS_API_URL).call("use_ship_to", map_of(*request))
        result = decode_ship_to(return_pairs(response, "use_ship_to"))

        if result.success:
            log.info(f"FFL {address.fflno} -> ship-to {result.ship_to_number}")
        return result
