from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from canteen_api.celery import celery as celery_app
from canteens.models import Canteen, MenuItem
from users.models import User


@pytest.fixture(autouse=True)
def eager_celery():
    celery_app.conf.update(CELERY_TASK_ALWAYS_EAGER=True, CELERY_TASK_EAGER_PROPAGATES=True)
    yield
    celery_app.conf.update(CELERY_TASK_ALWAYS_EAGER=False, CELERY_TASK_EAGER_PROPAGATES=False)


@pytest.fixture
def user(db):
    return User.objects.create_user(username="alice", password="s3cret-pass", first_name="Alice")


@pytest.fixture
def other_user(db):
    return User.objects.create_user(username="bob", password="s3cret-pass", first_name="Bob")


@pytest.fixture
def staff_user(db):
    return User.objects.create_user(username="admin", password="s3cret-pass", is_staff=True)


@pytest.fixture
def canteen(db):
    return Canteen.objects.create(
        name="North Hall Canteen",
        description="Noodles and rice bowls",
        location="North Hall, ground floor",
        open_time="07:30",
        close_time="20:00",
        tags=["noodles", "halal"],
    )


@pytest.fixture
def other_canteen(db):
    return Canteen.objects.create(
        name="Library Cafe",
        location="Main Library",
        open_time="09:00",
        close_time="18:00",
    )


@pytest.fixture
def menu_item(canteen):
    return MenuItem.objects.create(
        canteen=canteen,
        name="Beef Noodle Soup",
        price=Decimal("4.50"),
        category="Noodles",
    )


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def auth_client(user):
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def staff_client(staff_user):
    client = APIClient()
    client.force_authenticate(user=staff_user)
    return client
