"""Equipment domain models for AgroRent.

An equipment listing belongs to its owner, carries a rate table of up to
three prices (per hour, per day, per week) and a location used by the
proximity search. ``available`` is the owner's switch for accepting new
booking requests; it is independent of the booking state of the item.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from django.conf import settings  # type: ignore
from django.core.exceptions import ValidationError  # type: ignore
from django.core.validators import MaxValueValidator, MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from apps.bookings.domain.lifecycle import TERMINAL_STATUSES
from apps.bookings.pricing import RateTable
from shared.domain.value_objects import GeoPoint

RATE_VALIDATORS = [MinValueValidator(Decimal("0.00"))]


class Equipment(models.Model):
    """Piece of agricultural equipment listed for rent."""

    class Category(models.TextChoices):
        TRACTOR = "tractor", _("Tractor")
        HARVESTER = "harvester", _("Harvester")
        TILLER = "tiller", _("Tiller")
        CULTIVATOR = "cultivator", _("Cultivator")
        SEEDER = "seeder", _("Seeder")
        SPRAYER = "sprayer", _("Sprayer")
        PUMP = "pump", _("Pump")
        TRAILER = "trailer", _("Trailer")
        THRESHER = "thresher", _("Thresher")
        PLOUGH = "plough", _("Plough")
        ROTAVATOR = "rotavator", _("Rotavator")
        OTHER = "other", _("Other")

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="equipment",
    )
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    category = models.CharField(max_length=20, choices=Category.choices)

    price_per_hour = models.DecimalField(
        max_digits=10, decimal_places=2, null=True, blank=True, validators=RATE_VALIDATORS
    )
    price_per_day = models.DecimalField(
        max_digits=10, decimal_places=2, null=True, blank=True, validators=RATE_VALIDATORS
    )
    price_per_week = models.DecimalField(
        max_digits=10, decimal_places=2, null=True, blank=True, validators=RATE_VALIDATORS
    )

    latitude = models.DecimalField(
        max_digits=9,
        decimal_places=6,
        validators=[MinValueValidator(Decimal("-90")), MaxValueValidator(Decimal("90"))],
    )
    longitude = models.DecimalField(
        max_digits=9,
        decimal_places=6,
        validators=[MinValueValidator(Decimal("-180")), MaxValueValidator(Decimal("180"))],
    )
    address = models.CharField(max_length=255, blank=True)
    village = models.CharField(max_length=120, blank=True)
    district = models.CharField(max_length=120, blank=True)
    state = models.CharField(max_length=120, blank=True)
    pincode = models.CharField(max_length=10, blank=True)

    available = models.BooleanField(
        default=True,
        help_text=_("Owner switch: unavailable equipment stays visible but cannot be booked."),
    )
    images = models.JSONField(
        default=list,
        blank=True,
        help_text=_("Ordered list of image references."),
    )
    rating = models.DecimalField(
        max_digits=3,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0")), MaxValueValidator(Decimal("5"))],
    )
    total_ratings = models.PositiveIntegerField(default=0)
    times_rented = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Equipment")
        verbose_name_plural = _("Equipment")
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=(
                    models.Q(price_per_hour__isnull=False)
                    | models.Q(price_per_day__isnull=False)
                    | models.Q(price_per_week__isnull=False)
                ),
                name="equipment_has_rate",
            ),
        ]
        indexes = [
            models.Index(fields=["available", "category"], name="equipment_avail_cat_idx"),
            models.Index(fields=["owner"], name="equipment_owner_idx"),
            models.Index(fields=["latitude", "longitude"], name="equipment_lat_lng_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.get_category_display()})"

    def clean(self) -> None:
        if self.rate_table.is_empty:
            raise ValidationError(_("Set at least one of the hourly, daily or weekly price."))

    @property
    def rate_table(self) -> RateTable:
        return RateTable(
            per_hour=self.price_per_hour,
            per_day=self.price_per_day,
            per_week=self.price_per_week,
        )

    @property
    def location(self) -> GeoPoint:
        return GeoPoint(float(self.latitude), float(self.longitude))

    @property
    def display_price(self) -> Decimal | None:
        """Headline price shown in listings: daily, else hourly, else weekly."""
        for price in (self.price_per_day, self.price_per_hour, self.price_per_week):
            if price is not None:
                return price
        return None

    def price_for(self, basis: str | None) -> Decimal | None:
        """Rate for ``basis`` (hourly, daily or weekly); the display price when unset."""
        if basis == "hourly":
            return self.price_per_hour
        if basis == "daily":
            return self.price_per_day
        if basis == "weekly":
            return self.price_per_week
        return self.display_price

    def has_open_bookings(self) -> bool:
        return self.bookings.exclude(status__in=TERMINAL_STATUSES).exists()

    def toggle_availability(self) -> None:
        self.available = not self.available
        self.save(update_fields=["available", "updated_at"])

    def register_rating(self, value: int) -> None:
        """Fold a borrower's score into the running average (caller saves)."""
        total = self.rating * self.total_ratings + Decimal(value)
        self.total_ratings += 1
        self.rating = (total / self.total_ratings).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
