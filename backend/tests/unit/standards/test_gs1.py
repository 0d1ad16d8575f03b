"""Unit tests for GS1 check digit validation (GTIN-14, GLN, SSCC)."""

import pytest

from domain.standards.gs1 import (
    compute_gs1_check_digit,
    compute_gtin_check_digit,
    validate_gln,
    validate_gtin,
    validate_gtin_bulk,
    validate_sscc,
)


class TestComputeCheckDigit:

    @pytest.mark.parametrize("payload,digit", [
        ("4012345678901", 0),
        ("1234567890123", 5),
        ("0000000000000", 0),
        ("0000000000001", 9),
        ("0100000000000", 7),
    ])
    def test_weights_start_with_one(self, payload, digit):
        assert compute_gtin_check_digit(payload) == digit

    @pytest.mark.parametrize("payload", ["", "123", "40123456789010", "401234567890A", None])
    def test_rejects_bad_payload(self, payload):
        assert compute_gtin_check_digit(payload) is None


class TestValidateGtin:

    @pytest.mark.parametrize("gtin", ["40123456789010", "12345678901235", "00000000000000"])
    def test_valid(self, gtin):
        assert validate_gtin(gtin) is True

    @pytest.mark.parametrize("gtin", ["40123456789011", "40123456789012", "12345678901230"])
    def test_wrong_check_digit(self, gtin):
        assert validate_gtin(gtin) is False

    def test_every_flipped_check_digit_is_rejected(self):
        valid = "40123456789010"
        for digit in "123456789":
            assert validate_gtin(valid[:13] + digit) is False

    @pytest.mark.parametrize("gtin", [
        "",
        "4012345678901",
        "401234567890100",
        "4012345678901O",
        " 40123456789010",
        "40123456789010\n",
        "４０１２３４５６７８９０１０",
        None,
        40123456789010,
    ])
    def test_malformed_input_never_raises(self, gtin):
        assert validate_gtin(gtin) is False


class TestValidateGtinBulk:

    def test_maps_each_gtin_to_result(self):
        results = validate_gtin_bulk(["40123456789010", "40123456789011", "abc"])

        assert results == {
            "40123456789010": True,
            "40123456789011": False,
            "abc": False,
        }

    def test_duplicates_collapse(self):
        assert validate_gtin_bulk(["40123456789010"] * 3) == {"40123456789010": True}

    def test_empty_input(self):
        assert validate_gtin_bulk([]) == {}


class TestComputeGs1CheckDigit:

    @pytest.mark.parametrize("payload,digit", [
        ("400638133393", 1),
        ("401234500000", 9),
        ("10614141234567890", 8),
        ("0400638133393", 1),
        ("0", 0),
    ])
    def test_weights_start_with_three_from_the_right(self, payload, digit):
        assert compute_gs1_check_digit(payload) == digit

    @pytest.mark.parametrize("payload", ["", "12a", "1" * 18, "４００６", None, 400638133393])
    def test_rejects_bad_payload(self, payload):
        assert compute_gs1_check_digit(payload) is None


class TestValidateGln:

    @pytest.mark.parametrize("gln", ["4006381333931", "4012345000009", "0000000000000"])
    def test_valid(self, gln):
        assert validate_gln(gln) is True

    @pytest.mark.parametrize("gln", ["4006381333932", "4012345000000"])
    def test_wrong_check_digit(self, gln):
        assert validate_gln(gln) is False

    @pytest.mark.parametrize("gln", ["", "400638133393", "40063813339310", "40063813339X1", None])
    def test_malformed_input_never_raises(self, gln):
        assert validate_gln(gln) is False


class TestValidateSscc:

    @pytest.mark.parametrize("sscc", ["106141412345678908", "000000000000000000"])
    def test_valid(self, sscc):
        assert validate_sscc(sscc) is True

    def test_wrong_check_digit(self):
        assert validate_sscc("106141412345678909") is False

    @pytest.mark.parametrize("sscc", ["10614141234567890", "1061414123456789080", "40123456789010", None])
    def test_malformed_input_never_raises(self, sscc):
        assert validate_sscc(sscc) is False
