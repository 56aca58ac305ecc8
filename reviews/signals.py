from django.db import transaction
from django.db.models.signals import post_delete
from django.dispatch import receiver

from canteens.models import Canteen, MenuItem

from .models import Review
from .tasks import queue_recompute


def _subject_deleted_with(review, origin):
    """True when the reviewed canteen or menu item goes away in the same delete."""
    if isinstance(origin, MenuItem):
        return review.menu_item_id == origin.pk
    if isinstance(origin, Canteen):
        if review.canteen_id is not None:
            return review.canteen_id == origin.pk
        # Menu items of the canteen are in the same cascade, possibly already gone
        return not MenuItem.objects.filter(pk=review.menu_item_id).exclude(canteen_id=origin.pk).exists()
    return False


@receiver(post_delete, sender=Review)
def schedule_rating_refresh(sender, instance, origin=None, **kwargs):
    """
    Refresh the subject's rating once a review disappears, e.g. when its author is deleted.
    Queues at most one refresh per subject for a single delete.
    """
    if _subject_deleted_with(instance, origin):
        return

    subject = instance.subject
    queued = getattr(origin, "_queued_rating_refreshes", None)
    if queued is None:
        queued = set()
        if origin is not None:
            origin._queued_rating_refreshes = queued
    if subject in queued:
        return
    queued.add(subject)

    transaction.on_commit(lambda: queue_recompute(subject), robust=True)
