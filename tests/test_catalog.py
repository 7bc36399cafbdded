import ftplib
import os
import tempfile

import pytest

from zanders.config import ZandersConfig
from zanders.exceptions import NotAuthenticated
from zanders.services.catalog import CATALOG_FILENAME, Catalog, all_items, chunked, to_catalog_item
from zanders.services.inventory import Inventory
from zanders.services.user import User

HEADER = "available,desc1,desc2,itemnumber,manufacturer,mfgpnumber,mapprice,price1,qty1,qty2,qty3,price2,price3\r\n"
WIDGET = "5,Widget,Blue,W1,Acme,M1,9.99,12.99,1,,,11.99,10.99\r\n"
GADGET = "0,Gadget,,G2,Acme,M2,,4.50,,,,,\r\n"

EXPECTED_WIDGET = {
    "quantity": 5,
    "short_description": "Widget",
    "name": "Widget",
    "long_description": "Widget Blue",
    "item_identifier": "W1",
    "brand": "Acme",
    "mfg_number": "M1",
    "map_price": 9.99,
    "price": 12.99,
}


@pytest.fixture
def catalog_file(fake_ftp):
    fake_ftp.files[CATALOG_FILENAME] = (HEADER + WIDGET + GADGET).encode("cp1252")
    return fake_ftp


def test_row_mapping():
    row = {
        "quantity": "5", "short_description": "Widget", "desc2": "Blue", "item_identifier": "W1",
        "brand": "Acme", "mfg_number": "M1", "map_price": "9.99", "price": "12.99", "qty1": "1",
    }
    assert to_catalog_item(row) == EXPECTED_WIDGET


def test_non_numeric_values_are_kept_as_text(fake_ftp):
    fake_ftp.files[CATALOG_FILENAME] = (HEADER + "N/A,Odd,,O1,Acme,M3,call,TBD,,,,,\r\n" + WIDGET).encode("cp1252")

    (chunk,) = list(Catalog("dealer", "secret").all())

    odd, widget = chunk
    assert odd["quantity"] == "N/A"
    assert odd["map_price"] == "call"
    assert odd["price"] == "TBD"
    assert widget == EXPECTED_WIDGET


def test_chunked():
    assert list(chunked(range(5), 2)) == [[0, 1], [2, 3], [4]]
    assert list(chunked([], 3)) == []


def test_catalog_streams_mapped_rows(catalog_file):
    config = ZandersConfig(ftp_host="ftp.example", ftp_directory="Inventory/Test")
    chunks = list(Catalog("dealer", "secret", config=config).all(chunk_size=15))

    assert len(chunks) == 1
    widget, gadget = chunks[0]
    assert widget == EXPECTED_WIDGET
    assert gadget["quantity"] == 0
    assert gadget["long_description"] == "Gadget "
    assert "map_price" not in gadget

    ftp = catalog_file.instances[0]
    assert ftp.host == "ftp.example"
    assert ftp.path == "Inventory/Test"
    assert ftp.user == "dealer"
    assert ftp.closed


def test_catalog_chunk_size(catalog_file):
    chunks = list(all_items("dealer", "secret", chunk_size=1))
    assert [len(c) for c in chunks] == [1, 1]
    assert chunks[0][0]["item_identifier"] == "W1"


def test_headers_are_normalized(fake_ftp):
    fake_ftp.files[CATALOG_FILENAME] = b" ItemNumber ,Available\r\nW1,3\r\n"
    (chunk,) = list(Catalog("dealer", "secret").all())
    assert chunk[0]["item_identifier"] == "W1"
    assert chunk[0]["quantity"] == 3


def test_ftp_closed_and_tempfile_removed_on_failure(catalog_file, monkeypatch):
    created = []
    real_mkstemp = tempfile.mkstemp

    def tracking_mkstemp(*args, **kwargs):
        fd, path = real_mkstemp(*args, **kwargs)
        created.append(path)
        return fd, path

    monkeypatch.setattr("zanders.services.catalog.tempfile.mkstemp", tracking_mkstemp)
    catalog_file.fail_download = True

    with pytest.raises(ftplib.error_temp):
        list(Catalog("dealer", "secret").all())

    assert catalog_file.instances[0].closed
    assert created and not os.path.exists(created[0])


def test_catalog_login_rejected(catalog_file):
    catalog_file.reject_login = True
    with pytest.raises(NotAuthenticated):
        list(Catalog("dealer", "wrong").all())
    assert catalog_file.instances[0].closed


def test_inventory_projection(catalog_file):
    (chunk,) = list(Inventory("dealer", "secret").all())
    assert chunk == [
        {"item_identifier": "W1", "quantity": 5, "price": 12.99},
        {"item_identifier": "G2", "quantity": 0, "price": 4.5},
    ]


def test_user_authenticated(fake_ftp):
    assert User("dealer", "secret").authenticated() is True
    assert fake_ftp.instances[0].closed


def test_user_not_authenticated(fake_ftp):
    fake_ftp.reject_login = True
    assert User("dealer", "wrong").authenticated() is False
