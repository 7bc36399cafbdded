from typing import Optional

from zanders import ftp
from zanders.api import ClientFactory, soap_client
from zanders.config import ZandersConfig
from zanders.exceptions import MissingArgument
from zanders.models import Credentials


def requires(**options) -> None:
    missing = [k for k, v in options.items() if v is None or (isinstance(v, str) and not v.strip())]
    if missing:
        raise MissingArgument(missing)


class Service:
    def __init__(self, username: Optional[str] = None, password: Optional[str] = None, *,
                 config: Optional[ZandersConfig] = None):
        requires(username=username, password=password)
        self.credentials = Credentials(username, password)
        self.config = config or ZandersConfig()


class SoapService(Service):
    """Base for the SOAP-backed services; `client_factory(url)` must return an object with `call()`."""

    def __init__(self, username: Optional[str] = None, password: Optional[str] = None, *,
                 config: Optional[ZandersConfig] = None,
                 client_factory: Optional[ClientFactory] = None):
        super().__init__(username, password, config=config)
        self.client_factory = client_factory or (lambda url: soap_client(url, self.config))

    def soap_client(self, url: str):
        return self.client_factory(url)


class FtpService(Service):
    def connect(self):
        return ftp.connect(self.config, self.credentials)
