"""
Hour-of-day tier pricing.

A pricing config partitions the 24 hours of a day into priced tiers (peak,
off-peak, custom). Every operation keeps the exclusivity invariant: an hour
belongs to at most one tier. Hours claimed by no tier bill at the default price.
"""

import math
import uuid
from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

from .models import HourlyPriceTier, HourlyPricingConfig, TierKind, parse_hour

FALLBACK_HOURLY_RATE = 50


@dataclass(frozen=True)
class TierPreset:
    """Seed values for a new peak or off-peak tier."""
    label: str
    hours: Tuple[int, ...]
    multiplier: float


PRESET_TIERS: Dict[TierKind, TierPreset] = {
    TierKind.PEAK: TierPreset(
        label="Peak Hours",
        hours=(11, 12, 13, 17, 18, 19, 20),
        multiplier=1.5,
    ),
    TierKind.OFFPEAK: TierPreset(
        label="Off-Peak",
        hours=(6, 7, 8, 9, 21, 22),
        multiplier=0.75,
    ),
}


def hour_label(hour: int) -> str:
    """Format an hour of day as ``"12 AM"``, ``"1 PM"`` etc."""
    if hour % 12 == 0:
        display = 12
    else:
        display = hour % 12
    period = "AM" if hour < 12 else "PM"
    return f"{display} {period}"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _check_hour(hour: int) -> None:
    if not 0 <= hour <= 23:
        raise ValueError(f"Hour must be between 0 and 23, got {hour}")


def _seed_price(config: HourlyPricingConfig, fallback_rate: float, multiplier: float = 1.0) -> float:
    base_rate = config.default_price or fallback_rate
    if multiplier == 1.0:
        return base_rate
    return max(_round_half_up(base_rate * multiplier), 1)


def add_tier(
    config: HourlyPricingConfig,
    kind: Union[TierKind, str],
    *,
    presets: Mapping[TierKind, TierPreset] = PRESET_TIERS,
    fallback_rate: float = FALLBACK_HOURLY_RATE,
    tier_id: Optional[str] = None
) -> HourlyPricingConfig:
    """
    Append a new tier.

    Peak and off-peak tiers are seeded from their preset, keeping only hours
    that no existing tier claims, and priced at the base rate times the preset
    multiplier (rounded). Custom tiers start empty at the base rate.
    """
    kind = TierKind(kind)
    tier_id = tier_id or str(uuid.uuid4())

    if kind is TierKind.CUSTOM:
        new_tier = HourlyPriceTier(
            id=tier_id,
            label="Custom",
            hours=(),
            price=_seed_price(config, fallback_rate),
            kind=kind,
        )
    else:
        preset = presets[kind]
        claimed = set(config.claimed_hours())
        new_tier = HourlyPriceTier(
            id=tier_id,
            label=preset.label,
            hours=tuple(hour for hour in preset.hours if hour not in claimed),
            price=_seed_price(config, fallback_rate, preset.multiplier),
            kind=kind,
        )

    return replace(config, tiers=(*config.tiers, new_tier))


def remove_tier(config: HourlyPricingConfig, tier_id: str) -> Optional[HourlyPricingConfig]:
    """
    Delete a tier. Its hours become unclaimed.

    Returns None if no tier has the given id.
    """
    if config.tier(tier_id) is None:
        return None

    return replace(config, tiers=tuple(tier for tier in config.tiers if tier.id != tier_id))


def update_tier(
    config: HourlyPricingConfig,
    tier_id: str,
    *,
    label: Optional[str] = None,
    price: Optional[float] = None
) -> Optional[HourlyPricingConfig]:
    """
    Change a tier's label and/or price.

    Returns None if the tier does not exist or the price is not positive.
    """
    tier = config.tier(tier_id)
    if tier is None:
        return None
    if price is not None and price <= 0:
        return None

    updated = replace(
        tier,
        label=tier.label if label is None else label,
        price=tier.price if price is None else price,
    )

    return replace(
        config,
        tiers=tuple(updated if current.id == tier_id else current for current in config.tiers)
    )


def assign_hour_to_tier(
    config: HourlyPricingConfig,
    tier_id: str,
    hour: int
) -> Optional[HourlyPricingConfig]:
    """
    Toggle an hour in a tier.

    If another tier claims the hour it loses it first, then the hour is added
    to the target tier (or removed, if the target already had it).

    Returns None if no tier has the given id.
    """
    _check_hour(hour)

    target = config.tier(tier_id)
    if target is None:
        return None

    tiers: List[HourlyPriceTier] = []

    for tier in config.tiers:
        if tier.id == tier_id:
            if hour in tier.hours:
                hours = tuple(h for h in tier.hours if h != hour)
            else:
                hours = (*tier.hours, hour)
            tiers.append(replace(tier, hours=hours))
        elif hour in tier.hours:
            tiers.append(replace(tier, hours=tuple(h for h in tier.hours if h != hour)))
        else:
            tiers.append(tier)

    return replace(config, tiers=tuple(tiers))


def set_enabled(
    config: HourlyPricingConfig,
    enabled: bool,
    *,
    presets: Mapping[TierKind, TierPreset] = PRESET_TIERS,
    fallback_rate: float = FALLBACK_HOURLY_RATE,
    tier_id: Optional[str] = None
) -> HourlyPricingConfig:
    """
    Switch special pricing on or off.

    Enabling a config without tiers seeds a single peak tier holding the full
    peak preset. Disabling keeps the tiers so they come back when re-enabled.
    """
    config = replace(config, enabled=enabled)

    if enabled and not config.tiers:
        config = add_tier(
            config,
            TierKind.PEAK,
            presets=presets,
            fallback_rate=fallback_rate,
            tier_id=tier_id,
        )

    return config


def format_hour_range(hours: Iterable[int]) -> str:
    """
    Describe a set of hours as consecutive runs.

    Examples:
        [11, 12, 13]            -> "11 AM–1 PM"
        [6, 7, 9]               -> "6 AM–7 AM, 9 AM"
        [1, 3, 5, 7]            -> "1 AM, 3 AM +2 more"
    """
    sorted_hours = sorted(set(hours))

    if not sorted_hours:
        return "No hours selected"

    runs: List[Tuple[int, int]] = []
    run_start = run_end = sorted_hours[0]

    for hour in sorted_hours[1:]:
        if hour == run_end + 1:
            run_end = hour
            continue
        runs.append((run_start, run_end))
        run_start = run_end = hour
    runs.append((run_start, run_end))

    labels = [
        hour_label(start) if start == end else f"{hour_label(start)}–{hour_label(end)}"
        for start, end in runs[:2]
    ]
    text = ", ".join(labels)

    if len(runs) > 2:
        text += f" +{len(runs) - 2} more"

    return text


def price_for_hour(
    config: Optional[HourlyPricingConfig],
    hour: Union[int, str],
    base_rate: Optional[float] = None
) -> float:
    """
    Price of a single hour of day.

    A claimed hour bills at its tier's price, an unclaimed one at the config's
    default price. A disabled config bills every hour at its default price.
    Without a config, ``base_rate`` is used.
    """
    if isinstance(hour, str):
        hour = parse_hour(hour)
    _check_hour(hour)

    if config is None:
        if base_rate is None:
            raise ValueError("base_rate is required when no pricing config is given")
        return base_rate

    if not config.enabled:
        return config.default_price

    tier = config.tier_for_hour(hour)
    return tier.price if tier else config.default_price


def quote_hours(
    config: Optional[HourlyPricingConfig],
    hours: Iterable[Union[int, str]],
    base_rate: Optional[float] = None
) -> float:
    """Total price for a list of booked hour slots (ints or ``"HH:00"`` strings)."""
    return sum(price_for_hour(config, hour, base_rate) for hour in hours)
