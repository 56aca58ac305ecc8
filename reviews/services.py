"""
Keeps canteen and menu item ratings in step with their reviews.

`rating` and `review_count` are a materialized view over the review rows.
They are always rebuilt from a full scan of the subject's reviews, never
nudged up or down from the previous value, so repeated or concurrent
recomputes converge on the same numbers.
"""
import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import DatabaseError, transaction
from django.db.models import Avg, Count
from django.utils import timezone

from canteens.services import SUBJECT_MODELS, get_subject_object, subject_model
from core.exceptions import AggregateRecomputeError, NotFoundError, ValidationError
from core.subjects import parse_id

from .models import Review

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


def validate_rating(rating):
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise ValidationError("Rating must be a whole number between 1 and 5.")
    if not MIN_RATING <= rating <= MAX_RATING:
        raise ValidationError("Rating must be between 1 and 5.")
    return rating


def record_review(author_id, subject, rating, comment=""):
    """
    Store a review and refresh the reviewed subject's rating.

    The insert commits before the recompute starts. If the recompute fails
    the review stays and AggregateRecomputeError is raised, carrying the
    review and subject so only the recompute needs retrying.
    """
    rating = validate_rating(rating)
    author_id = parse_id(author_id, "user_id")

    if not get_user_model().objects.filter(pk=author_id).exists():
        raise NotFoundError("User not found.")
    subject_object = get_subject_object(subject)

    with transaction.atomic():
        review = Review.objects.create(
            user_id=author_id,
            rating=rating,
            comment=comment or "",
            **{subject.kind: subject_object},
        )
    logger.info(f"Review {review.id} ({rating}) recorded for {subject.kind} {subject.id}")

    try:
        recompute_aggregate(subject)
    except DatabaseError as exc:
        logger.exception(
            f"Rating recompute failed for {subject.kind} {subject.id} after review {review.id}"
        )
        raise AggregateRecomputeError(review, subject) from exc

    return review


def recompute_aggregate(subject):
    """
    Rebuild `rating` and `review_count` of one canteen or menu item.

    The subject row is locked for the duration so recomputes of the same
    subject run one after another. With no reviews both fields drop to 0.
    """
    model = subject_model(subject)

    with transaction.atomic():
        locked = model.objects.select_for_update().filter(pk=subject.id).first()
        if locked is None:
            raise NotFoundError(f"{model._meta.verbose_name.capitalize()} not found.")

        stats = Review.objects.filter(**{f"{subject.kind}_id": subject.id}).aggregate(
            average=Avg("rating"),
            count=Count("id"),
        )
        count = stats["count"]
        average = float(stats["average"]) if count else 0.0

        model.objects.filter(pk=subject.id).update(
            rating=average,
            review_count=count,
            updated_at=timezone.now(),
        )

    logger.info(f"Recomputed {subject.kind} {subject.id}: rating={average} over {count} review(s)")


def recompute_all_aggregates():
    """Rebuild every canteen and menu item rating. Returns how many were refreshed."""
    refreshed = 0
    for subject_type, model in SUBJECT_MODELS.items():
        for pk in list(model.objects.values_list("pk", flat=True)):
            try:
                recompute_aggregate(subject_type(pk))
            except NotFoundError:
                # Deleted while the sweep was running
                continue
            refreshed += 1

    logger.info(f"Recomputed ratings for {refreshed} subject(s)")
    return refreshed


def reviews_for_subject(subject):
    return (
        Review.objects.select_related("user", "canteen", "menu_item")
        .filter(**{f"{subject.kind}_id": subject.id})
        .order_by("-created_at")
    )


def recent_reviews(limit=None):
    if limit is None:
        limit = settings.RECENT_REVIEWS_LIMIT
    return Review.objects.select_related("user", "canteen", "menu_item").order_by("-created_at")[:limit]


def reviews_by_user(user_id):
    return (
        Review.objects.select_related("canteen", "menu_item")
        .filter(user_id=user_id)
        .order_by("-created_at")
    )
