"""
Rental pricing.

Derives the total charge for a rental interval from an equipment rate
table. The coarsest rate that fits the duration is used and billed per
started unit:

- 7 days or longer with a weekly rate: started weeks x weekly rate
- 1 day or longer with a daily rate: started days x daily rate
- otherwise with an hourly rate: started hours x hourly rate
- otherwise the next coarser rate that is set (day, then week), prorated
  by the exact duration

The amount is capped at one period of any coarser rate that is set, so a
23-hour rental never costs more than a full day, and the charge never
decreases as the duration grows. Amounts are rounded up to whole paise.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_CEILING, Decimal

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.domain.base import ValueObject
from shared.domain.exceptions import NoApplicableRate
from shared.domain.value_objects import TimeInterval

HOURS_PER_DAY = Decimal(24)
HOURS_PER_WEEK = Decimal(24 * 7)
CENT = Decimal("0.01")


class PricingType(models.TextChoices):
    HOURLY = "hourly", _("Hourly")
    DAILY = "daily", _("Daily")
    WEEKLY = "weekly", _("Weekly")
    PRORATED_DAILY = "prorated_daily", _("Daily rate, prorated")
    PRORATED_WEEKLY = "prorated_weekly", _("Weekly rate, prorated")


@dataclass(frozen=True)
class RateTable(ValueObject):
    """Hourly, daily and weekly prices of one equipment; any may be unset."""
    per_hour: Decimal | None = None
    per_day: Decimal | None = None
    per_week: Decimal | None = None

    def __post_init__(self):
        for rate in (self.per_hour, self.per_day, self.per_week):
            if rate is not None and rate < 0:
                raise ValueError("Rates cannot be negative")

    @property
    def is_empty(self) -> bool:
        return self.per_hour is None and self.per_day is None and self.per_week is None


@dataclass(frozen=True)
class Quote(ValueObject):
    """Result of a price computation, stored on the booking for audit."""
    amount: Decimal
    pricing_type: PricingType
    duration_hours: Decimal


def _started_units(hours: Decimal, unit_hours: Decimal) -> Decimal:
    return (hours / unit_hours).to_integral_value(rounding=ROUND_CEILING)


def compute_cost(rates: RateTable, interval: TimeInterval) -> Quote:
    """
    Price ``interval`` against ``rates``.

    Raises:
        NoApplicableRate: the rate table has no price at all
    """
    if rates.is_empty:
        raise NoApplicableRate()

    hours = interval.duration_hours

    if hours >= HOURS_PER_WEEK and rates.per_week is not None:
        amount = _started_units(hours, HOURS_PER_WEEK) * rates.per_week
        pricing_type = PricingType.WEEKLY
        coarser = []
    elif hours >= HOURS_PER_DAY and rates.per_day is not None:
        amount = _started_units(hours, HOURS_PER_DAY) * rates.per_day
        pricing_type = PricingType.DAILY
        coarser = [(rates.per_week, PricingType.WEEKLY)]
    elif rates.per_hour is not None:
        amount = _started_units(hours, Decimal(1)) * rates.per_hour
        pricing_type = PricingType.HOURLY
        coarser = [(rates.per_day, PricingType.DAILY), (rates.per_week, PricingType.WEEKLY)]
    elif rates.per_day is not None:
        amount = hours * rates.per_day / HOURS_PER_DAY
        pricing_type = PricingType.PRORATED_DAILY
        coarser = [(rates.per_week, PricingType.WEEKLY)]
    else:
        amount = hours * rates.per_week / HOURS_PER_WEEK
        pricing_type = PricingType.PRORATED_WEEKLY
        coarser = []

    for rate, rate_type in coarser:
        if rate is not None and rate < amount:
            amount, pricing_type = rate, rate_type

    return Quote(
        amount=amount.quantize(CENT, rounding=ROUND_CEILING),
        pricing_type=pricing_type,
        duration_hours=hours.quantize(CENT),
    )
