import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("canteens", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Favorite",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "canteen",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="favorited_by",
                        to="canteens.canteen",
                    ),
                ),
                (
                    "menu_item",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="favorited_by",
                        to="canteens.menuitem",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="favorites",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(
                            models.Q(("canteen__isnull", False), ("menu_item__isnull", True)),
                            models.Q(("canteen__isnull", True), ("menu_item__isnull", False)),
                            _connector="OR",
                        ),
                        name="favorite_has_exactly_one_subject",
                    ),
                    models.UniqueConstraint(
                        condition=models.Q(("canteen__isnull", False)),
                        fields=("user", "canteen"),
                        name="unique_favorite_canteen_per_user",
                    ),
                    models.UniqueConstraint(
                        condition=models.Q(("menu_item__isnull", False)),
                        fields=("user", "menu_item"),
                        name="unique_favorite_menu_item_per_user",
                    ),
                ],
            },
        ),
    ]
