"""Tests for DHL, DPD and Evri."""

import pytest


class TestDHL:
    """Test DHL tracking number recognition."""

    @pytest.fixture
    def dhl(self, carrier):
        """Get the DHL carrier."""
        return carrier("dhl")

    def test_express_air_waybill(self, dhl):
        """Test a 10-digit air waybill with and without a valid check digit."""
        match = dhl.try_parse_tracking_number("1234567890", "DE", "US")
        assert match.ambiguity_score == 98
        assert match.tracking_url == "https://www.dhl.com/en/express/tracking.html?AWB=1234567890"
        assert dhl.try_parse_tracking_number("1234567891", "DE", "US").ambiguity_score == 90

    def test_express_air_waybill_11_digit(self, dhl):
        """Test an 11-digit air waybill with and without a valid check digit."""
        assert dhl.try_parse_tracking_number("12345678909", "DE", "US").ambiguity_score == 98
        assert dhl.try_parse_tracking_number("12345678900", "DE", "US").ambiguity_score == 90

    def test_s10(self, dhl):
        """Test international postal numbers with and without a valid check digit."""
        assert dhl.try_parse_tracking_number("RR123456785GB", "DE", "US").ambiguity_score == 88
        assert dhl.try_parse_tracking_number("RR123456789GB", "DE", "US").ambiguity_score == 75

    def test_paket_domestic(self, dhl):
        """Test that 12-digit Paket numbers are strongest within Germany."""
        assert dhl.try_parse_tracking_number("123456789012", "DE", "DE").ambiguity_score == 92
        assert dhl.try_parse_tracking_number("123456789012", "DE", "FR").ambiguity_score == 60

    def test_paket_piece_code_url(self, dhl):
        """Test routing of Paket piece codes to dhl.de."""
        match = dhl.try_parse_tracking_number("3SABCD12345678", "DE", "DE")
        assert match.ambiguity_score == 95
        assert match.tracking_url.startswith("https://www.dhl.de/")
        assert match.tracking_url.endswith("piececode=3SABCD12345678")

    def test_global_mail_url(self, dhl):
        """Test routing of eCommerce numbers to Global Mail."""
        match = dhl.try_parse_tracking_number("GM1234567890123456", "US", "US")
        assert match.ambiguity_score == 95
        assert match.tracking_url == (
            "https://webtrack.dhlglobalmail.com/?trackingnumber=GM1234567890123456"
        )

    def test_ships_everywhere_from_fixed_origins(self, dhl):
        """Test the origin subset and the full destination list."""
        assert dhl.can_ship_from_to("DE", "AQ")
        assert dhl.try_parse_tracking_number("1234567890", "BR", "US") is None


class TestDPD:
    """Test DPD tracking number recognition."""

    @pytest.fixture
    def dpd(self, carrier):
        """Get the DPD carrier."""
        return carrier("dpd")

    def test_international_28_digit(self, dpd):
        """Test the 28-digit international format."""
        match = dpd.try_parse_tracking_number("1234567890123456789012345678", "DE", "FR")
        assert match.ambiguity_score == 95
        assert match.tracking_url == "https://www.dpd.com/tracking/1234567890123456789012345678"

    def test_s10(self, dpd):
        """Test that S10 numbers are not boosted."""
        assert dpd.try_parse_tracking_number("RR123456785GB", "GB", "DE").ambiguity_score == 90

    def test_german_express(self, dpd):
        """Test a German Express parcel."""
        match = dpd.try_parse_tracking_number("05123456789012", "DE", "FR")
        assert match.service == "express"
        assert match.ambiguity_score == 90

    def test_german_classic(self, dpd):
        """Test a German Classic parcel."""
        match = dpd.try_parse_tracking_number("02123456789012", "DE", "DE")
        assert match.service == "classic"
        assert match.ambiguity_score == 83

    def test_uk_next_day(self, dpd):
        """Test a UK Next Day parcel."""
        match = dpd.try_parse_tracking_number("03123456789012", "GB", "GB")
        assert match.service == "next_day"
        assert match.ambiguity_score == 91

    def test_origin_specific_base(self, dpd):
        """Test that each national company has its own base confidence."""
        assert dpd.try_parse_tracking_number("12345678901234", "PL", "DE").ambiguity_score == 93
        assert dpd.try_parse_tracking_number("12345678901234", "NO", "SE").ambiguity_score == 63

    def test_numeric_fallback(self, dpd):
        """Test the long numeric fallback."""
        match = dpd.try_parse_tracking_number("1234567890123456", "DE", "FR")
        assert match.description == "Long numeric fallback"
        assert match.ambiguity_score == 60

    def test_outside_network(self, dpd):
        """Test a route outside the DPD network."""
        assert dpd.try_parse_tracking_number("1234567890123456789012345678", "US", "DE") is None


class TestEvri:
    """Test Evri (Hermes) tracking number recognition."""

    @pytest.fixture
    def evri(self, carrier):
        """Get the Evri carrier."""
        return carrier("evri-hermes")

    def test_16_digit(self, evri):
        """Test the standard 16-digit format."""
        match = evri.try_parse_tracking_number("1234567890123456", "GB", "GB")
        assert match.ambiguity_score == 92
        assert match.tracking_url == "https://www.evri.com/track/1234567890123456"

    def test_letter_prefixed(self, evri):
        """Test letter-prefixed parcel numbers."""
        assert evri.try_parse_tracking_number("H12345678901234", "GB", "FR").ambiguity_score == 92

    def test_calling_card(self, evri):
        """Test the 8-digit calling card format."""
        assert evri.try_parse_tracking_number("12345678", "GB", "GB").ambiguity_score == 80

    def test_legacy(self, evri):
        """Test legacy Hermes numbers."""
        assert evri.try_parse_tracking_number("1234567890123", "GB", "GB").ambiguity_score == 90

    def test_only_ships_from_gb(self, evri):
        """Test that Evri requires a UK origin."""
        assert evri.try_parse_tracking_number("1234567890123456", "FR", "GB") is None
