"""Unit tests for eCl@ss code validation and parsing."""

import pytest

from domain.standards.eclass import EclassCode, parse_eclass_code, validate_eclass_code


class TestValidateEclassCode:

    @pytest.mark.parametrize("code", ["10012345", "11000000", "12999999"])
    def test_supported_versions(self, code):
        assert validate_eclass_code(code) is True

    @pytest.mark.parametrize("code", ["09012345", "13000000", "27010101", "00000000"])
    def test_unsupported_versions(self, code):
        assert validate_eclass_code(code) is False

    @pytest.mark.parametrize("code", [
        "1A012345",
        "1001234",
        "100123456",
        "10-01-23-45",
        "",
        " 10012345",
        None,
        10012345,
    ])
    def test_malformed_codes(self, code):
        assert validate_eclass_code(code) is False


class TestParseEclassCode:

    def test_plain_form(self):
        parsed = parse_eclass_code("27010203")

        assert parsed == EclassCode("27", "01", "02", "03")
        assert parsed.display == "27-01-02-03"
        assert parsed.version == 27
        assert not parsed.is_supported_version

    def test_hyphenated_form(self):
        parsed = parse_eclass_code("10-01-23-45")

        assert parsed.code == "10012345"
        assert parsed.is_supported_version

    @pytest.mark.parametrize("value", ["10-0123-45", "1001234", "abcdefgh", None])
    def test_unparseable(self, value):
        assert parse_eclass_code(value) is None
