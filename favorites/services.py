"""
The favorite registry.

A user favorites a canteen or a menu item at most once. The database's
conditional unique constraints are what guarantee it: concurrent adds for
the same pair race on the insert, one wins, and the loser's IntegrityError
becomes ConflictError.
"""
import logging

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction

from canteens.services import get_subject_object
from core.exceptions import ConflictError, NotFoundError
from core.subjects import SubjectFilter, parse_id

from .models import Favorite

logger = logging.getLogger(__name__)


def _get_user(user_id):
    user_id = parse_id(user_id, "user_id")
    try:
        return get_user_model().objects.get(pk=user_id)
    except get_user_model().DoesNotExist:
        raise NotFoundError("User not found.")


def add_favorite(user_id, subject):
    user = _get_user(user_id)
    subject_object = get_subject_object(subject)

    try:
        with transaction.atomic():
            favorite = Favorite.objects.create(user=user, **{subject.kind: subject_object})
    except IntegrityError:
        raise ConflictError(f"This {subject.kind.replace('_', ' ')} is already in your favorites.")

    logger.info(f"User {user.pk} favorited {subject.kind} {subject.id}")
    return favorite


def remove_favorite(user_id, subject_filter: SubjectFilter) -> bool:
    """Delete the user's favorites matching every constraint in the filter."""
    user_id = parse_id(user_id, "user_id")
    deleted, _ = Favorite.objects.filter(user_id=user_id, **subject_filter.lookups()).delete()
    if deleted:
        logger.info(f"User {user_id} removed {deleted} favorite(s) matching {subject_filter}")
    return deleted > 0


def is_favorite(user_id, subject_filter: SubjectFilter) -> bool:
    user_id = parse_id(user_id, "user_id")
    return Favorite.objects.filter(user_id=user_id, **subject_filter.lookups()).exists()


def toggle_favorite(user_id, subject) -> bool:
    """Flip membership for one subject and return whether it is now a favorite."""
    if remove_favorite(user_id, SubjectFilter.for_subject(subject)):
        return False
    try:
        add_favorite(user_id, subject)
    except ConflictError:
        # A concurrent request added it first
        pass
    return True


def favorites_for_user(user_id):
    user_id = parse_id(user_id, "user_id")
    return (
        Favorite.objects.select_related("canteen", "menu_item", "menu_item__canteen")
        .filter(user_id=user_id)
        .order_by("-created_at")
    )
