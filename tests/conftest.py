import ftplib

import pytest

from zanders.api import SoapResponse
from zanders.config import ZandersConfig


class _RecordingTransport:
    def __init__(self, soap, url):
        self.soap = soap
        self.url = url

    def call(self, operation, message):
        self.soap.calls.append((self.url, operation, message))
        reply = self.soap.responses[operation]
        if isinstance(reply, Exception):
            raise reply
        return SoapResponse({f"{operation}_response": {"return": {"item": reply}}})


class FakeSoap:
    """Client factory handing out transports that record calls and return canned items."""

    def __init__(self):
        self.responses = {}
        self.calls = []

    def reply(self, operation, items):
        self.responses[operation] = items

    def operations(self):
        return [op for _, op, _ in self.calls]

    def __call__(self, url):
        return _RecordingTransport(self, url)


@pytest.fixture
def soap():
    return FakeSoap()


@pytest.fixture
def config():
    return ZandersConfig()


@pytest.fixture
def fake_ftp(monkeypatch):
    class FakeFTP:
        instances = []
        files = {}
        reject_login = False
        fail_download = False

        def __init__(self, host):
            self.host = host
            self.user = None
            self.path = None
            self.closed = False
            FakeFTP.instances.append(self)

        def login(self, user, passwd):
            if FakeFTP.reject_login:
                raise ftplib.error_perm("530 Login incorrect.")
            self.user = user

        def set_pasv(self, val):
            pass

        def cwd(self, path):
            self.path = path

        def retrbinary(self, cmd, callback):
            if FakeFTP.fail_download:
                raise ftplib.error_temp("425 Can't open data connection.")
            callback(FakeFTP.files[cmd.split(" ", 1)[1]])

        def close(self):
            self.closed = True

    monkeypatch.setattr(ftplib, "FTP", FakeFTP)
    return FakeFTP
