"""Tests for the diagnostic listing script."""

from unittest.mock import MagicMock

from mac_vendor_lookup import VendorNotFoundError

from scan import get_vendor


def test_get_vendor_without_lookup():
    assert get_vendor(None, "AA-BB-CC-DD-EE-FF") == ""


def test_get_vendor_normalizes_mac():
    mac_lookup = MagicMock()
    mac_lookup.lookup.return_value = "Apple, Inc."

    assert get_vendor(mac_lookup, "AA-BB-CC-DD-EE-FF") == "Apple, Inc."
    mac_lookup.lookup.assert_called_once_with("aa:bb:cc:dd:ee:ff")


def test_get_vendor_unknown():
    mac_lookup = MagicMock()
    mac_lookup.lookup.side_effect = VendorNotFoundError("aa:bb:cc")

    assert get_vendor(mac_lookup, "aa:bb:cc:dd:ee:ff") == "Unknown vendor"
