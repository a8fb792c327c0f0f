"""Tests for churchapp.core.phone: country-code validation and WhatsApp links."""

import pytest

from churchapp.core.phone import (
    is_valid_phone_with_country_code,
    normalize_phone_for_whatsapp,
    phone_validation_error,
    whatsapp_link,
)


class TestPhoneValidation:
    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_empty_is_valid(self, value):
        assert phone_validation_error(value) is None

    def test_needs_plus(self):
        assert "country code" in phone_validation_error("07700 900123")

    def test_too_short(self):
        assert "too short" in phone_validation_error("+44 123")

    def test_too_long(self):
        assert "too long" in phone_validation_error("+1234567890123456")

    def test_spaces_and_dashes_allowed(self):
        assert is_valid_phone_with_country_code("+234 803-123-4567") is True


class TestWhatsApp:
    def test_normalize(self):
        assert normalize_phone_for_whatsapp("+44 (7700) 900-123") == "447700900123"

    def test_link(self):
        assert whatsapp_link("+44 7700 900123") == "https://wa.me/447700900123"

    @pytest.mark.parametrize("value", [None, "", "07700900123"])
    def test_no_link_for_invalid(self, value):
        assert whatsapp_link(value) is None
