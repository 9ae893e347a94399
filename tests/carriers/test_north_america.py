"""Tests for USPS, FedEx and Amazon Logistics."""

import pytest


class TestUSPS:
    """Test USPS tracking number recognition."""

    @pytest.fixture
    def usps(self, carrier):
        """Get the USPS carrier."""
        return carrier("usps")

    def test_impb(self, usps):
        """Test an Intelligent Mail package barcode."""
        match = usps.try_parse_tracking_number("9400111899223197428490", "US", "US")
        assert match is not None
        assert match.ambiguity_score in (95, 100)
        assert match.tracking_url == (
            "https://tools.usps.com/go/TrackConfirmAction?tLabels=9400111899223197428490"
        )

    def test_s10_check_digit(self, usps):
        """Test international postal numbers with and without a valid check digit."""
        assert usps.try_parse_tracking_number("RR123456785US", "US", "GB").ambiguity_score == 98
        assert usps.try_parse_tracking_number("RR123456789US", "US", "GB").ambiguity_score == 90

    def test_global_express_guaranteed(self, usps):
        """Test 82-prefixed numbers."""
        assert usps.try_parse_tracking_number("8212345678", "US", "US").ambiguity_score == 95

    def test_only_ships_from_us(self, usps):
        """Test that USPS never matches outside the US."""
        assert usps.get_shipping_from_countries() == {"US"}
        assert usps.try_parse_tracking_number("9400111899223197428490", "CA", "US") is None

    def test_territories_are_destinations(self, usps):
        """Test domestic territories and international destinations."""
        assert usps.can_ship_to("PR")
        assert usps.can_ship_to("GU")
        assert usps.can_ship_to("GB")
        assert not usps.can_ship_to("UK")


class TestFedEx:
    """Test FedEx tracking number recognition."""

    @pytest.fixture
    def fedex(self, carrier):
        """Get the FedEx carrier."""
        return carrier("fedex")

    def test_express_valid(self, fedex):
        """Test a 12-digit Express number with a valid check digit."""
        assert fedex.try_parse_tracking_number("986578788855", "US", "US").ambiguity_score == 98
        assert fedex.try_parse_tracking_number("986578788855", "GB", "DE").ambiguity_score == 85

    def test_express_invalid(self, fedex):
        """Test a 12-digit Express number with a bad check digit."""
        assert fedex.try_parse_tracking_number("986578788850", "US", "US").ambiguity_score == 98
        assert fedex.try_parse_tracking_number("986578788850", "CA", "US").ambiguity_score == 85
        assert fedex.try_parse_tracking_number("986578788850", "GB", "DE").ambiguity_score == 70

    def test_ground_15_digit(self, fedex):
        """Test a 15-digit Ground number."""
        assert fedex.try_parse_tracking_number("041441760228964", "US", "US").ambiguity_score == 96
        assert fedex.try_parse_tracking_number("041441760228964", "GB", "DE").ambiguity_score == 80

    def test_door_tag_north_america_only(self, fedex):
        """Test that door tags only match in North America."""
        match = fedex.try_parse_tracking_number("DT123456789012", "US", "US")
        assert match.ambiguity_score == 90
        assert match.tracking_url == "https://www.fedex.com/fedextrack/?tracknumbers=DT123456789012"
        assert fedex.try_parse_tracking_number("DT123456789012", "GB", "DE") is None

    def test_unsupported_country(self, fedex):
        """Test an origin outside the FedEx network."""
        assert fedex.try_parse_tracking_number("986578788855", "ZA", "US") is None


class TestAmazonLogistics:
    """Test Amazon Logistics tracking number recognition."""

    @pytest.fixture
    def amazon(self, carrier):
        """Get the Amazon Logistics carrier."""
        return carrier("amazon-logistics")

    def test_regional_prefix(self, amazon):
        """Test that regional prefixes score highest in their own region."""
        assert amazon.try_parse_tracking_number("TBA123456789012", "US", "US").ambiguity_score == 100
        assert amazon.try_parse_tracking_number("TBA123456789012", "CA", "US").ambiguity_score == 95
        assert amazon.try_parse_tracking_number("TBC123456789012", "CA", "CA").ambiguity_score == 100
        assert amazon.try_parse_tracking_number("TBM123456789012", "US", "MX").ambiguity_score == 85

    def test_multi_country_prefix(self, amazon):
        """Test prefixes shared by several origin countries."""
        assert amazon.try_parse_tracking_number("CC123456789012", "BE", "FR").ambiguity_score == 95
        assert amazon.try_parse_tracking_number("CC123456789012", "GB", "FR").ambiguity_score == 80

    def test_norway_is_operating_country(self, amazon):
        """Test that Norway survives YAML parsing of the country list."""
        assert amazon.can_ship_from_to("NO", "SE")

    def test_tracking_url(self, amazon):
        """Test the progress tracker URL."""
        assert amazon.get_tracking_url("tba123456789012") == (
            "https://www.amazon.com/progress-tracker/package/"
            "ref=ppx_yo_dt_b_track_package_o0?_=TBA123456789012"
        )

    def test_generic_fallback(self, amazon):
        """Test the generic alphanumeric fallback."""
        assert amazon.try_parse_tracking_number("ABCDEF1234567890", "US", "US").ambiguity_score == 60
