"""Django signals for cache invalidation.

Saving or deleting an Event or a Reservation through the ORM drops the
cached catalog snapshot and the affected event's detail entry once the
surrounding transaction commits.
"""

from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from foodshare import cache as catalog_cache
from foodshare.models import Event, Reservation


@receiver([post_save, post_delete], sender=Event)
def invalidate_event_cache(sender, instance, **kwargs):
    """Invalidate caches when an event is saved or deleted."""
    catalog_cache.invalidate_event(str(instance.pk))


@receiver([post_save, post_delete], sender=Reservation)
def invalidate_reservation_cache(sender, instance, **kwargs):
    """Invalidate caches when a reservation is saved or deleted."""
    catalog_cache.invalidate_event(str(instance.event_id))
