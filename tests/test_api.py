import uuid

import pytest
from django.db import DatabaseError
from kombu.exceptions import OperationalError

from canteens.models import Canteen, MenuItem
from core.subjects import CanteenSubject, MenuItemSubject
from favorites.models import Favorite
from reviews import services as review_services
from reviews.models import Review
from reviews.services import record_review
from reviews.tasks import recompute_aggregate_task


# Reviews


def test_post_review_updates_rating(auth_client, canteen):
    resp = auth_client.post(
        "/api/reviews/",
        {"canteen_id": str(canteen.id), "rating": 4, "comment": "Solid lunch"},
        format="json",
    )

    assert resp.status_code == 201
    body = resp.json()
    assert body["rating"] == 4
    assert body["canteen"] == str(canteen.id)
    assert body["rating_stale"] is False
    canteen.refresh_from_db()
    assert (canteen.rating, canteen.review_count) == (4.0, 1)


def test_post_review_with_both_subjects_is_rejected(auth_client, canteen, menu_item):
    resp = auth_client.post(
        "/api/reviews/",
        {"canteen_id": str(canteen.id), "menu_item_id": str(menu_item.id), "rating": 4},
        format="json",
    )

    assert resp.status_code == 400
    assert "error" in resp.json()
    assert not Review.objects.exists()


def test_post_review_without_subject_is_rejected(auth_client):
    resp = auth_client.post("/api/reviews/", {"rating": 4}, format="json")

    assert resp.status_code == 400
    assert not Review.objects.exists()


def test_post_review_with_out_of_range_rating(auth_client, canteen):
    resp = auth_client.post(
        "/api/reviews/", {"canteen_id": str(canteen.id), "rating": 9}, format="json"
    )

    assert resp.status_code == 400
    assert resp.json() == {"error": "Rating must be between 1 and 5."}


def test_post_review_for_unknown_menu_item(auth_client):
    resp = auth_client.post(
        "/api/reviews/", {"menu_item_id": str(uuid.uuid4()), "rating": 3}, format="json"
    )

    assert resp.status_code == 404
    assert resp.json() == {"error": "Menu item not found."}


def test_post_review_requires_login(api_client, canteen):
    resp = api_client.post(
        "/api/reviews/", {"canteen_id": str(canteen.id), "rating": 3}, format="json"
    )

    assert resp.status_code in (401, 403)
    assert not Review.objects.exists()


def test_post_review_with_failed_recompute_queues_refresh(auth_client, canteen, monkeypatch):
    queued = []

    def broken_recompute(subject):
        raise DatabaseError("connection lost")

    monkeypatch.setattr(review_services, "recompute_aggregate", broken_recompute)
    monkeypatch.setattr(recompute_aggregate_task, "delay", lambda *args: queued.append(args))

    resp = auth_client.post(
        "/api/reviews/", {"canteen_id": str(canteen.id), "rating": 2}, format="json"
    )

    assert resp.status_code == 201
    assert resp.json()["rating_stale"] is True
    assert queued == [("canteen", str(canteen.id))]
    assert Review.objects.count() == 1


def test_post_review_survives_broker_outage(auth_client, canteen, monkeypatch):
    def broken_recompute(subject):
        raise DatabaseError("connection lost")

    def broker_down(*args):
        raise OperationalError("Error 111 connecting to localhost:6379")

    monkeypatch.setattr(review_services, "recompute_aggregate", broken_recompute)
    monkeypatch.setattr(recompute_aggregate_task, "delay", broker_down)

    resp = auth_client.post(
        "/api/reviews/", {"canteen_id": str(canteen.id), "rating": 2}, format="json"
    )

    assert resp.status_code == 201
    assert resp.json()["rating_stale"] is True
    assert Review.objects.count() == 1


def test_list_reviews_for_canteen(api_client, user, canteen, other_canteen):
    record_review(user.id, CanteenSubject(canteen.id), 5, "Great")
    record_review(user.id, CanteenSubject(other_canteen.id), 1)

    resp = api_client.get("/api/reviews/", {"canteen_id": str(canteen.id)})

    assert resp.status_code == 200
    body = resp.json()
    assert len(body) == 1
    assert body[0]["comment"] == "Great"
    assert body[0]["user"]["username"] == "alice"
    assert body[0]["canteen_name"] == canteen.name
    assert body[0]["menu_item_name"] is None


def test_list_reviews_with_malformed_filter(api_client, db):
    resp = api_client.get("/api/reviews/", {"canteen_id": "abc"})

    assert resp.status_code == 400


def test_recent_reviews_feed(api_client, user, canteen, menu_item, settings):
    settings.RECENT_REVIEWS_LIMIT = 2
    record_review(user.id, CanteenSubject(canteen.id), 5)
    record_review(user.id, MenuItemSubject(menu_item.id), 4)
    record_review(user.id, CanteenSubject(canteen.id), 3)

    resp = api_client.get("/api/reviews/")

    assert resp.status_code == 200
    assert len(resp.json()) == 2


def test_my_reviews(auth_client, user, other_user, canteen):
    record_review(user.id, CanteenSubject(canteen.id), 5)
    record_review(other_user.id, CanteenSubject(canteen.id), 2)

    resp = auth_client.get("/api/reviews/mine/")

    assert resp.status_code == 200
    assert [r["rating"] for r in resp.json()] == [5]


# Favorites


def test_add_favorite_then_duplicate_conflicts(auth_client, canteen):
    first = auth_client.post("/api/favorites/", {"canteen_id": str(canteen.id)}, format="json")
    second = auth_client.post("/api/favorites/", {"canteen_id": str(canteen.id)}, format="json")

    assert first.status_code == 201
    assert first.json()["canteen"]["id"] == str(canteen.id)
    assert second.status_code == 409
    assert Favorite.objects.count() == 1


def test_add_favorite_needs_exactly_one_subject(auth_client, canteen, menu_item):
    neither = auth_client.post("/api/favorites/", {}, format="json")
    both = auth_client.post(
        "/api/favorites/",
        {"canteen_id": str(canteen.id), "menu_item_id": str(menu_item.id)},
        format="json",
    )

    assert neither.status_code == 400
    assert both.status_code == 400
    assert not Favorite.objects.exists()


def test_check_and_remove_favorite(auth_client, user, menu_item):
    auth_client.post("/api/favorites/", {"menu_item_id": str(menu_item.id)}, format="json")

    check = auth_client.get("/api/favorites/check/", {"menu_item_id": str(menu_item.id)})
    assert check.json() == {"is_favorite": True}

    removed = auth_client.delete(f"/api/favorites/?menu_item_id={menu_item.id}")
    assert removed.status_code == 204
    assert removed.content == b""

    check = auth_client.get("/api/favorites/check/", {"menu_item_id": str(menu_item.id)})
    assert check.json() == {"is_favorite": False}

    again = auth_client.delete(f"/api/favorites/?menu_item_id={menu_item.id}")
    assert again.status_code == 404


def test_remove_favorite_without_filter_is_rejected(auth_client, user, canteen):
    auth_client.post("/api/favorites/", {"canteen_id": str(canteen.id)}, format="json")

    resp = auth_client.delete("/api/favorites/")

    assert resp.status_code == 400
    assert Favorite.objects.filter(user=user).count() == 1


def test_toggle_favorite(auth_client, canteen):
    on = auth_client.post("/api/favorites/toggle/", {"canteen_id": str(canteen.id)}, format="json")
    off = auth_client.post("/api/favorites/toggle/", {"canteen_id": str(canteen.id)}, format="json")

    assert on.json() == {"is_favorite": True}
    assert off.json() == {"is_favorite": False}


def test_list_favorites_only_shows_own(auth_client, other_user, canteen, menu_item):
    auth_client.post("/api/favorites/", {"menu_item_id": str(menu_item.id)}, format="json")
    Favorite.objects.create(user=other_user, canteen=canteen)

    resp = auth_client.get("/api/favorites/")

    assert resp.status_code == 200
    body = resp.json()
    assert len(body) == 1
    assert body[0]["menu_item"]["name"] == menu_item.name
    assert body[0]["canteen"] is None


def test_favorites_require_login(api_client, canteen):
    assert api_client.get("/api/favorites/").status_code in (401, 403)
    assert api_client.get("/api/favorites/check/", {"canteen_id": str(canteen.id)}).status_code in (401, 403)


# Directory


def test_canteens_are_listed_by_rating(api_client, user, canteen, other_canteen):
    record_review(user.id, CanteenSubject(other_canteen.id), 5)
    record_review(user.id, CanteenSubject(canteen.id), 3)

    resp = api_client.get("/api/canteens/")

    assert resp.status_code == 200
    assert [c["name"] for c in resp.json()] == [other_canteen.name, canteen.name]


def test_search_canteens_by_location(api_client, canteen, other_canteen):
    resp = api_client.get("/api/canteens/", {"search": "library"})

    assert [c["id"] for c in resp.json()] == [str(other_canteen.id)]


def test_staff_creates_canteen(staff_client):
    resp = staff_client.post(
        "/api/canteens/",
        {
            "name": "East Wing Grill",
            "location": "East Wing",
            "open_time": "11:00",
            "close_time": "22:00",
            "tags": ["grill", " burgers "],
            "rating": 5,
            "review_count": 100,
        },
        format="json",
    )

    assert resp.status_code == 201
    canteen = Canteen.objects.get(name="East Wing Grill")
    assert canteen.tags == ["grill", "burgers"]
    assert (canteen.rating, canteen.review_count) == (0, 0)


def test_students_cannot_create_canteens(auth_client):
    resp = auth_client.post(
        "/api/canteens/",
        {"name": "Pop-up", "location": "Quad", "open_time": "10:00", "close_time": "14:00"},
        format="json",
    )

    assert resp.status_code == 403


def test_rating_cannot_be_patched(staff_client, canteen):
    resp = staff_client.patch(
        f"/api/canteens/{canteen.id}/", {"rating": 5, "is_open": False}, format="json"
    )

    assert resp.status_code == 200
    canteen.refresh_from_db()
    assert canteen.is_open is False
    assert canteen.rating == 0


def test_deleting_canteen_cascades_to_menu(staff_client, canteen, menu_item):
    resp = staff_client.delete(f"/api/canteens/{canteen.id}/")

    assert resp.status_code == 204
    assert not MenuItem.objects.filter(pk=menu_item.pk).exists()


def test_canteen_menu_and_reviews(api_client, user, canteen, menu_item):
    record_review(user.id, CanteenSubject(canteen.id), 4)

    menu = api_client.get(f"/api/canteens/{canteen.id}/menu-items/")
    reviews = api_client.get(f"/api/canteens/{canteen.id}/reviews/")

    assert [m["name"] for m in menu.json()] == [menu_item.name]
    assert [r["rating"] for r in reviews.json()] == [4]


def test_menu_item_reviews(api_client, user, menu_item):
    record_review(user.id, MenuItemSubject(menu_item.id), 2)

    resp = api_client.get(f"/api/menu-items/{menu_item.id}/reviews/")

    assert resp.status_code == 200
    assert resp.json()[0]["menu_item_name"] == menu_item.name


def test_popular_menu_items(api_client, user, canteen, menu_item):
    sold_out = MenuItem.objects.create(
        canteen=canteen, name="Mango Pudding", price="2.00", is_available=False
    )
    record_review(user.id, MenuItemSubject(sold_out.id), 5)
    record_review(user.id, MenuItemSubject(menu_item.id), 3)

    resp = api_client.get("/api/menu-items/", {"popular": "true"})

    assert [m["name"] for m in resp.json()] == [menu_item.name]


def test_filter_menu_items_by_canteen(api_client, canteen, other_canteen, menu_item):
    MenuItem.objects.create(canteen=other_canteen, name="Flat White", price="3.20", category="Coffee")

    resp = api_client.get("/api/menu-items/", {"canteen": str(canteen.id)})

    assert [m["name"] for m in resp.json()] == [menu_item.name]


@pytest.mark.parametrize("price", ("-1.00", "abc"))
def test_menu_item_price_is_validated(staff_client, canteen, price):
    resp = staff_client.post(
        "/api/menu-items/",
        {"canteen": str(canteen.id), "name": "Mystery Meal", "price": price},
        format="json",
    )

    assert resp.status_code == 400


def test_current_user(auth_client, user):
    resp = auth_client.get("/api/auth/user/")

    assert resp.status_code == 200
    assert resp.json()["id"] == str(user.id)
