"""Owner-side operations on equipment listings."""

from __future__ import annotations

import logging

from django.db import transaction  # type: ignore

from shared.domain.exceptions import EquipmentInUse, NotFound, Unauthorized

from .models import Equipment

logger = logging.getLogger(__name__)


def _get_owned_equipment(equipment_id, owner, *, lock: bool = False) -> Equipment:
    queryset = Equipment.objects.filter(pk=equipment_id)
    if lock:
        queryset = queryset.select_for_update()
    equipment = queryset.first()
    if equipment is None:
        raise NotFound(f"Equipment {equipment_id} not found.")
    if equipment.owner_id != owner.pk:
        raise Unauthorized("Only the owner can manage this equipment.")
    return equipment


def toggle_availability(equipment_id, owner) -> Equipment:
    with transaction.atomic():
        equipment = _get_owned_equipment(equipment_id, owner, lock=True)
        equipment.toggle_availability()

    logger.info("Equipment %s availability set to %s", equipment.pk, equipment.available)
    return equipment


def delete_equipment(equipment_id, owner) -> None:
    """
    Remove a listing together with its finished bookings.

    Raises:
        EquipmentInUse: a booking of the equipment is still pending,
            approved or active
    """
    with transaction.atomic():
        equipment = _get_owned_equipment(equipment_id, owner, lock=True)
        if equipment.has_open_bookings():
            raise EquipmentInUse()
        equipment.delete()

    logger.info("Equipment %s deleted by owner %s", equipment_id, owner.pk)
