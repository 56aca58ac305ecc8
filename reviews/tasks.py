import logging

from celery import shared_task
from django.db import DatabaseError
from kombu.exceptions import OperationalError

from core.exceptions import NotFoundError
from core.subjects import subject_from_kind

from .services import recompute_aggregate, recompute_all_aggregates

logger = logging.getLogger(__name__)


@shared_task(bind=True, max_retries=3)
def recompute_aggregate_task(self, kind, subject_id):
    """
    Rebuild one subject's rating in the background.

    Queued when a review's inline recompute failed or a review was deleted.
    """
    subject = subject_from_kind(kind, subject_id)
    try:
        recompute_aggregate(subject)
    except NotFoundError:
        logger.warning(f"Skipping recompute, {kind} {subject_id} no longer exists")
        return f"{kind} {subject_id} not found"
    except DatabaseError as exc:
        logger.warning(f"Recompute for {kind} {subject_id} failed, retrying: {exc}")
        raise self.retry(exc=exc, countdown=60 * (2 ** self.request.retries))

    return f"Recomputed rating for {kind} {subject_id}"


@shared_task
def recompute_all_aggregates_task():
    """
    Periodic repair sweep over every canteen and menu item.
    Run this nightly via Celery Beat
    """
    refreshed = recompute_all_aggregates()
    return f"Recomputed ratings for {refreshed} subjects"


def queue_recompute(subject):
    """
    Hand one subject's recompute to the worker.

    Returns False when the broker is unreachable; the nightly sweep picks the subject up instead.
    """
    try:
        recompute_aggregate_task.delay(subject.kind, str(subject.id))
    except OperationalError:
        logger.exception(f"Could not queue recompute for {subject.kind} {subject.id}")
        return False
    return True
