"""Model signal handlers for availability cache invalidation."""

from django.db import transaction
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from apps.rooms.models import Room, RoomBlock
from apps.surf_camps.models import SurfCamp

from .cache import invalidate_availability_cache
from .models import Booking, RoomAssignment, SurfCampAssignment


@receiver([post_save, post_delete], sender=Booking)
@receiver([post_save, post_delete], sender=RoomAssignment)
@receiver([post_save, post_delete], sender=SurfCampAssignment)
@receiver([post_save, post_delete], sender=Room)
@receiver([post_save, post_delete], sender=RoomBlock)
@receiver([post_save, post_delete], sender=SurfCamp)
def availability_cache_invalidator(**_: object) -> None:
    """Drop cached date availability once the change is committed."""
    transaction.on_commit(invalidate_availability_cache)
