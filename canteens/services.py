from django.conf import settings
from django.db.models import Q

from core.exceptions import NotFoundError, ValidationError
from core.subjects import CanteenSubject, MenuItemSubject

from .models import Canteen, MenuItem

SUBJECT_MODELS = {
    CanteenSubject: Canteen,
    MenuItemSubject: MenuItem,
}


def subject_model(subject):
    try:
        return SUBJECT_MODELS[type(subject)]
    except KeyError:
        raise ValidationError("Exactly one canteen or menu item must be referenced.")


def get_subject_object(subject):
    """Fetch the canteen or menu item a subject points at, or raise NotFoundError."""
    model = subject_model(subject)
    try:
        return model.objects.get(pk=subject.id)
    except model.DoesNotExist:
        raise NotFoundError(f"{model._meta.verbose_name.capitalize()} not found.")


def list_canteens():
    return Canteen.objects.order_by("-rating", "name")


def search_canteens(query):
    return list_canteens().filter(
        Q(name__icontains=query)
        | Q(description__icontains=query)
        | Q(location__icontains=query)
    )


def menu_items_for_canteen(canteen_id):
    return (
        MenuItem.objects.select_related("canteen")
        .filter(canteen_id=canteen_id)
        .order_by("-rating", "name")
    )


def search_menu_items(query):
    return (
        MenuItem.objects.select_related("canteen")
        .filter(
            Q(name__icontains=query)
            | Q(description__icontains=query)
            | Q(category__icontains=query)
        )
        .order_by("-rating", "name")
    )


def popular_menu_items(limit=None):
    """Available items ranked by rating, ties broken by how often they were reviewed."""
    if limit is None:
        limit = settings.POPULAR_MENU_ITEMS_LIMIT
    return (
        MenuItem.objects.select_related("canteen")
        .filter(is_available=True)
        .order_by("-rating", "-review_count", "name")[:limit]
    )
