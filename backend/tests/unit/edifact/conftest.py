"""Fixtures for building raw EDIFACT messages by hand."""

import pytest


REFERENCE_BODY = (
    "BGM+220+PO-1001+9",
    "DTM+137:20240115:203",
    "NAD+BY+BUYER-GLN-1",
    "NAD+SE+SELLER-GLN-2",
    "LIN+1+40123456789010:EN",
    "QTY+21:5",
    "MOA+203:12.50",
    "UNS+S",
    "CNT+2:1",
)


@pytest.fixture
def order_body() -> list[str]:
    """Segments between UNH and UNT of the one-item reference order."""
    return list(REFERENCE_BODY)


@pytest.fixture
def make_message():
    """Wrap body segments in UNH/UNT with a matching control count.

    The UNT count leaves UNH out, as the encoder writes it.
    """
    def _make(body, reference="REF1", count=None):
        if count is None:
            count = len(body) + 1
        segments = [f"UNH+{reference}+ORDERS:D:01B:UN:EAN010", *body, f"UNT+{count}+{reference}"]
        return "'".join(segments) + "'"

    return _make
