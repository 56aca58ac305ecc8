import uuid
from dataclasses import dataclass
from typing import ClassVar

from .exceptions import ValidationError


@dataclass(frozen=True)
class CanteenSubject:
    id: uuid.UUID

    kind: ClassVar[str] = "canteen"


@dataclass(frozen=True)
class MenuItemSubject:
    id: uuid.UUID

    kind: ClassVar[str] = "menu_item"


Subject = CanteenSubject | MenuItemSubject

SUBJECT_TYPES = {
    CanteenSubject.kind: CanteenSubject,
    MenuItemSubject.kind: MenuItemSubject,
}


def parse_id(value, field):
    """Coerce `value` to a UUID, rejecting anything malformed."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        raise ValidationError(f"{field} must be a valid id.")


def _blank(value):
    return value is None or value == ""


def subject_from_ids(canteen_id=None, menu_item_id=None) -> Subject:
    """
    Build a subject from the pair of optional ids a request carries.

    Exactly one id must be present.
    """
    has_canteen = not _blank(canteen_id)
    has_menu_item = not _blank(menu_item_id)

    if has_canteen and has_menu_item:
        raise ValidationError("Provide either canteen_id or menu_item_id, not both.")
    if has_canteen:
        return CanteenSubject(parse_id(canteen_id, "canteen_id"))
    if has_menu_item:
        return MenuItemSubject(parse_id(menu_item_id, "menu_item_id"))
    raise ValidationError("Either canteen_id or menu_item_id is required.")


def subject_from_kind(kind: str, subject_id) -> Subject:
    try:
        subject_type = SUBJECT_TYPES[kind]
    except KeyError:
        raise ValidationError(f"Unknown subject kind: {kind!r}.")
    return subject_type(parse_id(subject_id, f"{kind}_id"))


@dataclass(frozen=True)
class SubjectFilter:
    """
    Constraints used to find a user's favorites.

    Both ids may be given; a row must then satisfy all of them.
    """

    canteen_id: uuid.UUID | None = None
    menu_item_id: uuid.UUID | None = None

    @classmethod
    def build(cls, canteen_id=None, menu_item_id=None) -> "SubjectFilter":
        if _blank(canteen_id) and _blank(menu_item_id):
            raise ValidationError("Either canteen_id or menu_item_id is required.")
        return cls(
            canteen_id=None if _blank(canteen_id) else parse_id(canteen_id, "canteen_id"),
            menu_item_id=None if _blank(menu_item_id) else parse_id(menu_item_id, "menu_item_id"),
        )

    @classmethod
    def for_subject(cls, subject: Subject) -> "SubjectFilter":
        if isinstance(subject, CanteenSubject):
            return cls(canteen_id=subject.id)
        return cls(menu_item_id=subject.id)

    def lookups(self) -> dict:
        constraints = {}
        if self.canteen_id is not None:
            constraints["canteen_id"] = self.canteen_id
        if self.menu_item_id is not None:
            constraints["menu_item_id"] = self.menu_item_id
        return constraints
