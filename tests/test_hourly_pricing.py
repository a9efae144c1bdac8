"""
Tests for hourly tier pricing.
"""

import random

import pytest

from rentalcalendar.domain.hourly_pricing import (
    add_tier,
    assign_hour_to_tier,
    format_hour_range,
    hour_label,
    price_for_hour,
    quote_hours,
    remove_tier,
    set_enabled,
    update_tier,
)
from rentalcalendar.domain.models import HourlyPriceTier, HourlyPricingConfig, TierKind


def _config(*tiers: HourlyPriceTier, default_price: float = 40) -> HourlyPricingConfig:
    return HourlyPricingConfig(enabled=True, tiers=tiers, default_price=default_price)


class TestAddTier:
    """Tests for add_tier."""

    def test_peak_tier_from_preset(self):
        """Test a peak tier is seeded from the preset at 1.5x."""
        config = add_tier(_config(default_price=40), TierKind.PEAK, tier_id="peak")

        tier = config.tier("peak")
        assert tier.label == "Peak Hours"
        assert tier.hours == (11, 12, 13, 17, 18, 19, 20)
        assert tier.price == 60

    def test_offpeak_tier_rounds_half_up(self):
        """Test off-peak price is rounded half up."""
        config = add_tier(_config(default_price=50), "offpeak", tier_id="off")

        assert config.tier("off").price == 38
        assert config.tier("off").hours == (6, 7, 8, 9, 21, 22)

    def test_presets_skip_claimed_hours(self):
        """Test preset hours already claimed stay with their tier."""
        lunch = HourlyPriceTier(id="lunch", label="Lunch", hours=(11, 12), price=70)
        config = add_tier(_config(lunch), TierKind.PEAK, tier_id="peak")

        assert config.tier("lunch").hours == (11, 12)
        assert config.tier("peak").hours == (13, 17, 18, 19, 20)

    def test_custom_tier_starts_empty(self):
        """Test custom tiers have no hours and the base price."""
        config = add_tier(_config(default_price=45), TierKind.CUSTOM, tier_id="c")

        assert config.tier("c").hours == ()
        assert config.tier("c").price == 45
        assert config.tier("c").label == "Custom"

    def test_fallback_rate_without_default_price(self):
        """Test the fallback rate seeds prices when no base rate is set."""
        config = add_tier(HourlyPricingConfig(), TierKind.PEAK, tier_id="p", fallback_rate=50)

        assert config.tier("p").price == 75

    def test_tier_ids_are_generated(self):
        """Test tiers get unique ids when none is given."""
        config = add_tier(add_tier(_config(), "custom"), "custom")

        assert len({tier.id for tier in config.tiers}) == 2


class TestAssignHour:
    """Tests for assign_hour_to_tier."""

    def test_toggle_adds_then_removes(self):
        """Test assigning twice toggles the hour."""
        config = add_tier(_config(), "custom", tier_id="c")

        config = assign_hour_to_tier(config, "c", 15)
        assert config.tier("c").hours == (15,)

        config = assign_hour_to_tier(config, "c", 15)
        assert config.tier("c").hours == ()

    def test_hour_moves_from_other_tier(self):
        """Test an hour claimed elsewhere moves to the target tier."""
        peak = HourlyPriceTier(id="peak", label="Peak", hours=(11, 12, 13), price=60)
        custom = HourlyPriceTier(id="c", label="Custom", hours=(14,), price=45)

        config = assign_hour_to_tier(_config(peak, custom), "c", 12)

        assert config.tier("peak").hours == (11, 13)
        assert config.tier("c").hours == (12, 14)

    def test_unknown_tier_is_rejected(self):
        """Test an unknown tier id returns None."""
        assert assign_hour_to_tier(_config(), "missing", 3) is None

    def test_invalid_hour_raises(self):
        """Test hours outside 0-23 raise ValueError."""
        config = add_tier(_config(), "custom", tier_id="c")

        with pytest.raises(ValueError):
            assign_hour_to_tier(config, "c", 24)

    def test_random_assignments_keep_exclusivity(self):
        """Test every hour stays in at most one tier."""
        rng = random.Random(99)
        config = _config()
        for kind in ("peak", "offpeak", "custom", "custom"):
            config = add_tier(config, kind)
        tier_ids = [tier.id for tier in config.tiers]

        for _ in range(300):
            config = assign_hour_to_tier(config, rng.choice(tier_ids), rng.randint(0, 23))

        claimed = config.claimed_hours()
        assert len(claimed) == len(set(claimed))


class TestTierEditing:
    """Tests for remove_tier, update_tier and set_enabled."""

    def test_remove_tier_unclaims_hours(self):
        """Test removed tier hours are not redistributed."""
        peak = HourlyPriceTier(id="peak", label="Peak", hours=(11, 12), price=60)
        off = HourlyPriceTier(id="off", label="Off", hours=(6,), price=30)

        config = remove_tier(_config(peak, off), "peak")

        assert [tier.id for tier in config.tiers] == ["off"]
        assert config.claimed_hours() == [6]
        assert remove_tier(config, "peak") is None

    def test_update_tier(self):
        """Test label and price updates; non-positive prices are rejected."""
        peak = HourlyPriceTier(id="peak", label="Peak", hours=(11,), price=60)
        config = update_tier(_config(peak), "peak", label="Lunch rush", price=65)

        assert config.tier("peak").label == "Lunch rush"
        assert config.tier("peak").price == 65
        assert update_tier(config, "peak", price=0) is None
        assert update_tier(config, "nope", label="x") is None

    def test_enable_seeds_peak_tier(self):
        """Test enabling an empty config seeds the full peak preset."""
        config = set_enabled(HourlyPricingConfig(default_price=40), True, tier_id="p")

        assert config.enabled
        assert config.tier("p").hours == (11, 12, 13, 17, 18, 19, 20)
        assert config.tier("p").price == 60

    def test_disable_keeps_tiers(self):
        """Test disabling keeps existing tiers."""
        config = set_enabled(HourlyPricingConfig(default_price=40), True, tier_id="p")
        config = set_enabled(config, False)

        assert not config.enabled
        assert config.tier("p") is not None


class TestPriceLookup:
    """Tests for price_for_hour and quote_hours."""

    def _pricing(self, enabled: bool = True) -> HourlyPricingConfig:
        peak = HourlyPriceTier(id="peak", label="Peak", hours=(11, 12), price=60, kind="peak")
        return HourlyPricingConfig(enabled=enabled, tiers=(peak,), default_price=40)

    def test_claimed_and_unclaimed_hours(self):
        """Test tier price for claimed hours and default otherwise."""
        pricing = self._pricing()

        assert price_for_hour(pricing, 11) == 60
        assert price_for_hour(pricing, "12:00") == 60
        assert price_for_hour(pricing, 9) == 40

    def test_disabled_config_bills_default(self):
        """Test a disabled config bills every hour at the default price."""
        assert price_for_hour(self._pricing(enabled=False), 11) == 40

    def test_missing_config_uses_base_rate(self):
        """Test the base rate is used without a config."""
        assert price_for_hour(None, 11, base_rate=35) == 35
        with pytest.raises(ValueError):
            price_for_hour(None, 11)

    def test_quote_hours(self):
        """Test quoting a list of booked slots."""
        assert quote_hours(self._pricing(), ["10:00", "11:00", "12:00"]) == 160


class TestFormatHourRange:
    """Tests for format_hour_range."""

    def test_empty(self):
        assert format_hour_range([]) == "No hours selected"

    def test_single_hour(self):
        assert format_hour_range([0]) == "12 AM"

    def test_consecutive_run(self):
        assert format_hour_range([13, 11, 12]) == "11 AM–1 PM"

    def test_two_runs(self):
        assert format_hour_range([6, 7, 8, 9, 21, 22]) == "6 AM–9 AM, 9 PM–10 PM"

    def test_more_than_two_runs(self):
        assert format_hour_range([1, 3, 5, 7]) == "1 AM, 3 AM +2 more"

    def test_hour_labels(self):
        assert hour_label(0) == "12 AM"
        assert hour_label(12) == "12 PM"
        assert hour_label(23) == "11 PM"
